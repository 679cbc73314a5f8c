"""FastAPI application entrypoint for sniffer service mode."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from ..auditor import TemplateAuditor
from ..catalog import (
    ChainCatalogProvider,
    FileUsageProvider,
    HeaderCatalogProvider,
    StaticCatalogProvider,
    StaticUsageProvider,
    TemplateCatalogProvider,
    UsageDataProvider,
)
from ..config import ConfigError, ScanConfig
from ..models import DEFAULT_CORE_TEMPLATES


class AuditRequest(BaseModel):
    child_root: str
    parent_root: Optional[str] = None
    core_templates: List[str] = Field(default_factory=lambda: list(DEFAULT_CORE_TEMPLATES))
    catalog: Dict[str, str] = Field(default_factory=dict)
    catalog_from_headers: bool = True
    used_values: List[str] = Field(default_factory=list)
    usage_file: Optional[str] = None


class HealthResponse(BaseModel):
    status: str


def _default_auditor() -> TemplateAuditor:
    return TemplateAuditor()


def create_app(
    auditor_factory: Callable[[], TemplateAuditor] = _default_auditor,
) -> FastAPI:
    """Create the FastAPI application exposing template audits."""

    app = FastAPI(title="Template Sniffer Service", version="1.0.0")

    async def get_auditor() -> TemplateAuditor:
        # Fresh auditor per request; audits never share state.
        return auditor_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/audit")
    async def audit(
        payload: AuditRequest,
        auditor: TemplateAuditor = Depends(get_auditor),
    ) -> Dict[str, Any]:
        scan = ScanConfig(
            child_root=Path(payload.child_root).expanduser(),
            parent_root=Path(payload.parent_root).expanduser() if payload.parent_root else None,
            core_names=tuple(payload.core_templates),
        )
        providers: List[TemplateCatalogProvider] = []
        if payload.catalog:
            providers.append(StaticCatalogProvider(payload.catalog))
        if payload.catalog_from_headers:
            providers.append(HeaderCatalogProvider(scan.child_root, scan.parent_root))
        usage: UsageDataProvider
        if payload.usage_file:
            usage = FileUsageProvider(Path(payload.usage_file).expanduser())
        else:
            usage = StaticUsageProvider(payload.used_values)

        def _run_audit() -> Dict[str, Any]:
            report = auditor.audit(
                scan,
                ChainCatalogProvider(*providers),
                usage,
            )
            return report.to_dict()

        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, _run_audit)

    @app.exception_handler(ConfigError)
    async def config_error_handler(_: Any, exc: ConfigError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    import uvicorn

    app = create_app()
    uvicorn.run(app, host=host, port=port)
