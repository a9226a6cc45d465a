from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from app.processor.models import SourceFormat, UploadedDocument


class ExtractionState(str, Enum):
    RECEIVED = "received"
    CLASSIFIED = "classified"
    EXTRACTING = "extracting"
    VALIDATED = "validated"
    DONE = "done"
    REJECTED = "rejected"


@dataclass(slots=True)
class PipelineContext:
    """Request-scoped state carried through the extraction steps."""

    document: UploadedDocument
    state: ExtractionState = ExtractionState.RECEIVED
    source_format: SourceFormat | None = None
    extracted_text: str = ""


class PipelineStep(ABC):
    @abstractmethod
    async def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
