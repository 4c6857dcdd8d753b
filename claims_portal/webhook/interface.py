from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, AsyncIterable, List, Optional


@dataclass
class UpstreamReply:
    """The decoded answer of the external workflow."""
    status_code: int
    data: Any

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass
class OutgoingFile:
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"


class WorkflowGateway(ABC):
    """
    Abstract Base Class that defines the contract for talking to the external
    workflow-automation platform (n8n today).

    The platform starts a claim on a fixed webhook and hands back a
    session-specific 'resume URL' for every following step.
    """

    @abstractmethod
    async def start_workflow(self, payload: Any) -> UpstreamReply:
        """Triggers a new workflow run. The reply must be JSON."""
        pass

    @abstractmethod
    async def resume_workflow(self, resume_url: str, payload: Any) -> UpstreamReply:
        """Continues a run with a JSON payload."""
        pass

    @abstractmethod
    async def resume_workflow_stream(
        self,
        resume_url: str,
        body: AsyncIterable[bytes],
        content_type: str,
        content_length: Optional[str],
    ) -> UpstreamReply:
        """Continues a run with an already encoded body (e.g. multipart), relayed as-is."""
        pass

    @abstractmethod
    async def resume_workflow_files(
        self, resume_url: str, files: List[OutgoingFile]
    ) -> UpstreamReply:
        """Continues a run by uploading files as multipart form data."""
        pass
