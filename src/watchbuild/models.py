from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict


@dataclass
class PluginFile:
    path: str
    data: bytes | str
    error: BaseException | None = None


class Asset(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    copy_time: float


class SourceFile(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    compilation_time: float


class GeneratedFile(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str
    source_files: tuple[SourceFile, ...] = ()


class DisposedFiles(BaseModel):
    model_config = ConfigDict(frozen=True)

    generated: tuple[GeneratedFile, ...] = ()
    source_paths: tuple[str, ...] = ()


class PassSnapshot(BaseModel):
    """Final state of a build pass, as handed over by the pipeline."""

    model_config = ConfigDict(frozen=True)

    start_time: float
    assets: tuple[Asset, ...] = ()
    generated_files: tuple[GeneratedFile, ...] = ()
    disposed: DisposedFiles = DisposedFiles()
