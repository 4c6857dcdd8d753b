import logging
from typing import Any, AsyncIterable, List, Optional

import httpx

from ..decoding import decode_json_body, decode_resume_body
from ..exceptions import WebhookError
from ..interface import OutgoingFile, UpstreamReply, WorkflowGateway
from ...config import settings

logger = logging.getLogger(__name__)


class HttpWorkflowGateway(WorkflowGateway):
    def __init__(
        self,
        start_url: str = settings.START_WEBHOOK_URL,
        timeout: float = settings.REQUEST_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.start_url = start_url
        self.timeout = timeout
        # Tests inject an httpx.MockTransport here
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    async def start_workflow(self, payload: Any) -> UpstreamReply:
        response = await self._post(self.start_url, json=payload)
        return UpstreamReply(
            status_code=response.status_code,
            data=decode_json_body(response.text),
        )

    async def resume_workflow(self, resume_url: str, payload: Any) -> UpstreamReply:
        response = await self._post(resume_url, json=payload)
        return self._decode_resume(response)

    async def resume_workflow_stream(
        self,
        resume_url: str,
        body: AsyncIterable[bytes],
        content_type: str,
        content_length: Optional[str],
    ) -> UpstreamReply:
        headers = {"Content-Type": content_type}
        # An explicit Content-Length stops httpx from switching to chunked encoding
        if content_length:
            headers["Content-Length"] = content_length
        response = await self._post(resume_url, content=body, headers=headers)
        return self._decode_resume(response)

    async def resume_workflow_files(
        self, resume_url: str, files: List[OutgoingFile]
    ) -> UpstreamReply:
        multipart = [
            ("files", (f.filename, f.content, f.content_type)) for f in files
        ]
        response = await self._post(resume_url, files=multipart)
        return self._decode_resume(response)

    async def _post(self, url: str, **kwargs) -> httpx.Response:
        try:
            async with self._client() as client:
                return await client.post(url, **kwargs)
        except httpx.HTTPError as e:
            raise WebhookError(f"Request to workflow failed: {e}") from e

    def _decode_resume(self, response: httpx.Response) -> UpstreamReply:
        logger.info(f"Workflow response status: {response.status_code}")
        data = decode_resume_body(response.headers.get("content-type"), response.text)
        logger.debug(f"Workflow response data: {data}")
        return UpstreamReply(status_code=response.status_code, data=data)
