from abc import ABC, abstractmethod
from dataclasses import dataclass

from file_migrator.origin.models import FetchedFile, FetchJob


@dataclass(slots=True)
class FileContext:
    job: FetchJob
    fetched: FetchedFile | None = None
    storage_key: str = ""
    public_url: str = ""
    audit_skipped: bool = False


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: FileContext) -> FileContext:
        raise NotImplementedError
