"""HTTP service — scan uploads and manage the active rule set."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from fastapi import FastAPI, File, Query, Request, UploadFile
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from docscan import __version__
from docscan.api.errors import APIError, install_error_handlers
from docscan.config.schema import DocScanConfig
from docscan.engine.evaluator import evaluate
from docscan.extract import ExtractError, extract_text
from docscan.findings.models import Finding
from docscan.output.json_report import findings_to_list
from docscan.rules.loader import (
    SourceReadError,
    ValidationError,
    load_rules,
    load_rules_from_records,
)
from docscan.rules.models import Rule
from docscan.rules.store import RuleStore

logger = logging.getLogger(__name__)

_RULESET_NAME_RE = re.compile(r"[A-Za-z0-9_-]+")


class ReloadRequest(BaseModel):
    rules: List[Dict[str, Any]]


class LoadRequest(BaseModel):
    path: str


def _store(request: Request) -> RuleStore:
    return request.app.state.store


def _config(request: Request) -> DocScanConfig:
    return request.app.state.config


async def _read_document(request: Request, upload: Optional[UploadFile]) -> tuple[str, str]:
    """Read an upload and return (file_id, text)."""
    if upload is None or not upload.filename:
        raise APIError(400, "missing file")

    limit = _config(request).server.max_upload_mb * 1024 * 1024
    data = await upload.read(limit + 1)
    if len(data) > limit:
        raise APIError(413, f"file exceeds {_config(request).server.max_upload_mb}MB limit")

    try:
        text = extract_text(data, upload.filename)
    except ExtractError as exc:
        raise APIError(400, str(exc)) from exc
    return upload.filename, text


async def _evaluate(text: str, file_id: str, rules: Sequence[Rule]) -> List[Finding]:
    findings = await run_in_threadpool(evaluate, text, file_id, rules)
    logger.info("Scanned %s: %d findings", file_id, len(findings))
    return findings


def create_app(store: RuleStore, config: Optional[DocScanConfig] = None) -> FastAPI:
    """Build the FastAPI app around an explicitly owned rule store."""
    app = FastAPI(title="docscan", version=__version__)
    app.state.store = store
    app.state.config = config or DocScanConfig()
    install_error_handlers(app)

    @app.post("/scan")
    async def scan(request: Request, file: Optional[UploadFile] = File(None)):
        """Scan a document against the active rule set."""
        file_id, text = await _read_document(request, file)
        findings = await _evaluate(text, file_id, _store(request).get_rules())
        return findings_to_list(findings)

    @app.post("/report")
    async def report(request: Request, file: Optional[UploadFile] = File(None)):
        """Scan a document and wrap the findings with its file id."""
        file_id, text = await _read_document(request, file)
        findings = await _evaluate(text, file_id, _store(request).get_rules())
        return {"file_id": file_id, "findings": findings_to_list(findings)}

    @app.post("/ruleset")
    async def ruleset(
        request: Request,
        rule: Optional[str] = Query(None),
        file: Optional[UploadFile] = File(None),
    ):
        """Scan against a named rule set without touching the active one."""
        if not rule:
            raise APIError(400, "missing rule set name")
        if not _RULESET_NAME_RE.fullmatch(rule):
            raise APIError(400, "invalid rule set name")

        path = Path(_config(request).rules.directory) / f"{rule}.yaml"
        if not path.is_file():
            raise APIError(404, f"rule set {rule!r} not found")
        try:
            rules = load_rules(path)
        except (SourceReadError, ValidationError) as exc:
            raise APIError(500, f"rule set {rule!r} is invalid: {exc}") from exc

        file_id, text = await _read_document(request, file)
        findings = await _evaluate(text, file_id, rules)
        return {"file_id": file_id, "ruleset": rule, "findings": findings_to_list(findings)}

    @app.post("/rules/reload")
    def reload_rules(request: Request, body: ReloadRequest):
        """Replace the active rule set with the rules in the request body."""
        try:
            rules = load_rules_from_records(body.rules)
        except (SourceReadError, ValidationError) as exc:
            raise APIError(400, str(exc)) from exc
        _store(request).set_rules(rules)
        return {"status": "ok", "rules": len(rules)}

    @app.post("/rules/load")
    def load_rules_file(request: Request, body: LoadRequest):
        """Load a rule-set file from disk and activate it."""
        if not body.path or ".." in Path(body.path).parts:
            raise APIError(400, "invalid path")
        store = _store(request)
        try:
            store.load_and_activate(body.path)
        except SourceReadError as exc:
            raise APIError(400, str(exc)) from exc
        except ValidationError as exc:
            raise APIError(422, str(exc)) from exc
        return {"status": "ok", "rules": len(store)}

    @app.get("/rules")
    def list_rules(request: Request):
        """Return the active rule set."""
        return {"rules": [r.to_dict() for r in _store(request).get_rules()]}

    @app.get("/health")
    def health(request: Request):
        store = _store(request)
        rules_file = Path(_config(request).rules.file)
        if not rules_file.is_file():
            return JSONResponse(
                status_code=503,
                content={"status": "unavailable", "message": f"rules file {rules_file} not found"},
            )
        return {"status": "ok", "rules": len(store), "revision": store.revision}

    return app
