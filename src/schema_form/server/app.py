"""
HTTP host for schema-form.

A thin Starlette controller around the core:

1. GET  /                           index of registered forms
2. GET  /forms/{name}               initial render
3. POST /forms/{name}               urlencoded submission -> re-render or artifact
4. GET  /api/forms/{name}/schema    JSON Schema export + metadata
5. POST /api/forms/{name}/validate  JSON value tree -> error set
6. GET  /health                     health check

Usage:
    python run_server.py
    # Then open http://localhost:9110
"""

import logging
from html import escape
from urllib.parse import parse_qsl

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse
from starlette.routing import Route

from schema_form.compiler.metadata import extract_metadata
from schema_form.config import get_config
from schema_form.generators.registry import FormEntry, FormRegistry, GenerationError
from schema_form.orchestrator import FormOrchestrator
from schema_form.rendering.renderer import FormRenderer
from schema_form.validation.validator import validate_detailed

logger = logging.getLogger("schema-form.server")

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body>
<h1>{title}</h1>
{body}
</body>
</html>
"""


def _page(title: str, body: str) -> str:
    return PAGE_TEMPLATE.format(title=escape(title), body=body)


def _form_page(entry: FormEntry, markup: str) -> str:
    body = (
        f'<form method="post" action="/forms/{escape(entry.name)}" novalidate>\n'
        f"{markup}"
        '<button type="submit">Submit</button>\n'
        "</form>"
    )
    if entry.description:
        body = f'<p class="form-description">{escape(entry.description)}</p>\n{body}'
    return _page(entry.title, body)


def create_app(
    registry: FormRegistry,
    renderer: FormRenderer | None = None,
    debug: bool | None = None,
) -> Starlette:
    """
    Create the Starlette app serving the forms in ``registry``.

    Args:
        registry: Forms to serve; built once by the caller.
        renderer: Renderer shared by all requests. If None, a default-configured one.
        debug: Starlette debug mode. If None, uses config.debug.
    """
    renderer = renderer or FormRenderer()
    if debug is None:
        debug = get_config().debug

    def lookup_entry(request: Request) -> FormEntry | None:
        name = request.path_params["name"]
        if name not in registry:
            logger.info("Unknown form requested: %s", name)
            return None
        return registry.get(name)

    def not_found_html(request: Request) -> HTMLResponse:
        name = request.path_params["name"]
        return HTMLResponse(
            _page("Not found", f"<p>No form named {escape(name)}.</p>"), status_code=404
        )

    def not_found_json(request: Request) -> JSONResponse:
        return JSONResponse(
            {"error": f"Unknown form: {request.path_params['name']}"}, status_code=404
        )

    async def health_check(request: Request) -> JSONResponse:
        """Health check endpoint."""
        return JSONResponse({
            "status": "healthy",
            "service": "schema-form",
            "forms": registry.names(),
        })

    async def index(request: Request) -> HTMLResponse:
        """List registered forms in registration order."""
        items = "\n".join(
            f'<li><a href="/forms/{escape(entry.name)}">{escape(entry.title)}</a></li>'
            for entry in registry
        )
        return HTMLResponse(_page("Forms", f'<ul class="form-index">\n{items}\n</ul>'))

    async def show_form(request: Request) -> HTMLResponse:
        entry = lookup_entry(request)
        if entry is None:
            return not_found_html(request)

        markup = FormOrchestrator.from_entry(entry, renderer).render_initial()
        return HTMLResponse(_form_page(entry, markup))

    async def submit_form(request: Request) -> HTMLResponse:
        entry = lookup_entry(request)
        if entry is None:
            return not_found_html(request)

        body = (await request.body()).decode("utf-8", errors="replace")
        pairs = parse_qsl(body, keep_blank_values=True)

        try:
            outcome = FormOrchestrator.from_entry(entry, renderer).submit(pairs)
        except GenerationError as e:
            return HTMLResponse(
                _page(entry.title, f'<p class="generation-error">{escape(e.message)}</p>'),
                status_code=502,
            )

        if not outcome.is_valid:
            return HTMLResponse(_form_page(entry, outcome.markup), status_code=422)

        artifact = escape(outcome.artifact or "")
        return HTMLResponse(
            _page(entry.title, f'<pre class="generation-result">{artifact}</pre>')
        )

    async def form_schema(request: Request) -> JSONResponse:
        entry = lookup_entry(request)
        if entry is None:
            return not_found_json(request)

        schema = entry.form.data_schema
        return JSONResponse({
            "name": entry.name,
            "title": entry.title,
            "schema": schema.to_json_schema(),
            "metadata": extract_metadata(schema).model_dump(),
        })

    async def validate_form_data(request: Request) -> JSONResponse:
        entry = lookup_entry(request)
        if entry is None:
            return not_found_json(request)

        try:
            data = await request.json()
        except ValueError as e:
            return JSONResponse({"error": f"Invalid JSON: {e}"}, status_code=400)
        if not isinstance(data, dict):
            return JSONResponse({"error": "Form data must be a JSON object"}, status_code=400)

        result = validate_detailed(data, entry.form.data_schema)
        return JSONResponse({
            "is_valid": result.is_valid,
            "errors": result.to_error_dict(),
            "validated_data": result.validated_data,
        })

    return Starlette(
        debug=debug,
        routes=[
            Route("/health", health_check, methods=["GET"]),
            Route("/", index, methods=["GET"]),
            Route("/forms/{name}", show_form, methods=["GET"]),
            Route("/forms/{name}", submit_form, methods=["POST"]),
            Route("/api/forms/{name}/schema", form_schema, methods=["GET"]),
            Route("/api/forms/{name}/validate", validate_form_data, methods=["POST"]),
        ],
    )


def run_server(registry: FormRegistry, host: str | None = None, port: int | None = None) -> None:
    """
    Serve ``registry`` with uvicorn.

    Args:
        registry: Forms to serve.
        host: Host to bind to. If None, uses config.server_host.
        port: Port to listen on. If None, uses config.server_port.
    """
    import uvicorn

    config = get_config()
    host = host or config.server_host
    port = port or config.server_port

    logger.info(f"Starting schema-form server on {host}:{port} ({len(registry)} forms)")

    app = create_app(registry)
    server_config = uvicorn.Config(app, host=host, port=port, log_level=config.log_level.lower())
    server_instance = uvicorn.Server(server_config)
    server_instance.run()
