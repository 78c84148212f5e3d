"""CLI interface for the documentation bot."""

import asyncio
from typing import Optional

import typer

from .config import AppSettings, load_settings
from .exceptions import DocBotError
from .flows import RunOptions, RunReport, default_registry
from .guides.samples import seed_sample_guides
from .guides.store import GuideStore
from .observability import setup_structured_logging

app = typer.Typer(help="Scripted browser flows that produce verified step-by-step guides")


def _load() -> AppSettings:
    try:
        return load_settings()
    except DocBotError as e:
        raise _fail(str(e)) from e


def _bootstrap(verbose: bool = False) -> AppSettings:
    settings = _load()
    level = "DEBUG" if verbose else settings.logging.level
    setup_structured_logging(level=level, json_output=settings.logging.json_output)
    return settings


def _fail(message: str) -> typer.Exit:
    print(f"Error: {message}")
    return typer.Exit(code=1)


def _print_summary(report: RunReport) -> None:
    print()
    print("=" * 50)
    print("SUMMARY")
    print("=" * 50)
    print(f"Total:      {report.total_flows}")
    print(f"Successful: {report.successful}")
    print(f"Failed:     {report.failed}")
    print(f"Skipped:    {report.skipped}")
    print(f"Duration:   {report.duration_ms / 1000:.1f}s")

    failed = [r for r in report.results if r.failed]
    if failed:
        print()
        print("Failed flows:")
        for result in failed:
            print(f"  - {result.flow_id}: {result.error}")
            if result.failure_path:
                print(f"    Artifacts: {result.failure_path}")

    generated = [r for r in report.results if r.success]
    if generated:
        print()
        print("Generated guides:")
        for result in generated:
            print(f"  - {result.flow_id} ({result.steps_completed} steps)")


@app.command()
def run(
    flow_ids: Optional[list[str]] = typer.Option(None, "--id", "-i", help="Run only this flow (repeatable)"),
    tag: str = typer.Option(None, "--tag", "-t", help="Run flows with this tag"),
    module: str = typer.Option(None, "--module", "-m", help="Run flows of this module, e.g. Orders"),
    continue_on_failure: bool = typer.Option(False, "--continue-on-failure", help="Keep going after a failed flow"),
    headless: Optional[bool] = typer.Option(None, "--headless/--headed", help="Override the configured browser mode"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Run flows and publish a guide for every successful one."""
    from .flows.runner import FlowRunner

    settings = _bootstrap(verbose)
    options = RunOptions(
        flow_ids=flow_ids or [],
        tag=tag,
        module=module,
        headless=headless,
        continue_on_failure=continue_on_failure,
        verbose=verbose,
    )

    print(f"Target:     {settings.target.base_url}")
    print(f"Output:     {settings.output.root}")
    print(f"Guides:     {settings.get_guides_dir()}")
    print(f"Auth state: {'found' if settings.has_auth_state() else 'missing (run: docbot auth)'}")
    print()

    try:
        report = asyncio.run(FlowRunner(settings).run(options))
    except DocBotError as e:
        raise _fail(str(e)) from e

    _print_summary(report)
    if report.has_failures:
        raise typer.Exit(code=1)


@app.command("list")
def list_flows() -> None:
    """List registered flows grouped by module."""
    registry = default_registry()
    print(f"Registered flows: {registry.count()}")
    for module, flow_ids in registry.summary().items():
        print()
        print(f"{module}:")
        for flow_id in flow_ids:
            spec = registry.get(flow_id).spec
            auth = "" if spec.requires_auth else " (no auth)"
            print(f"  - {flow_id}: {spec.title}{auth}")
            if spec.tags:
                print(f"      tags: {', '.join(spec.tags)}")


@app.command()
def report() -> None:
    """Show documentation coverage: generated, broken and pending guides."""
    from .report import build_report, render_report

    settings = _bootstrap()
    coverage = build_report(default_registry(), GuideStore(settings.get_guides_dir()), settings.output.failures_dir)
    print(render_report(coverage, settings))


@app.command()
def auth() -> None:
    """Log in with the configured credentials and save the browser session."""
    from .auth import authenticate

    settings = _bootstrap()
    try:
        auth_file = asyncio.run(authenticate(settings))
    except DocBotError as e:
        raise _fail(str(e)) from e
    print(f"Auth state saved to {auth_file}")


@app.command()
def seed() -> None:
    """Reset and seed fixture data on the target application, then verify it."""
    from .seed import DevDocsClient

    settings = _bootstrap()

    async def _seed():
        async with DevDocsClient(settings.target.base_url, secret=settings.target.get_docs_secret()) as client:
            info = await client.info()
            if not info.enabled:
                raise DocBotError(f"Dev-docs endpoints are disabled on {settings.target.base_url} ({info.environment})")
            return await client.seed_and_verify()

    try:
        verified = asyncio.run(_seed())
    except DocBotError as e:
        raise _fail(str(e)) from e

    print("Seed verified:")
    for name, count in verified.counts.model_dump().items():
        print(f"  {name}: {count}")


@app.command("seed-samples")
def seed_samples() -> None:
    """Write sample guides into the guide directory."""
    settings = _bootstrap()
    store = GuideStore(settings.get_guides_dir())
    guides = seed_sample_guides(store)
    print(f"Wrote {len(guides)} sample guides to {store.directory}")
    for guide in guides:
        print(f"  - {guide.id}: {guide.metadata.title}")


@app.command()
def serve(
    host: str = typer.Option(None, "--host", help="Bind address"),
    port: int = typer.Option(None, "--port", "-p", help="Bind port"),
) -> None:
    """Serve published guides over HTTP."""
    import uvicorn

    from .viewer import create_app

    settings = _bootstrap()
    store = GuideStore(settings.get_guides_dir())
    host = host or settings.viewer.host
    port = port or settings.viewer.port
    print(f"Serving {store.directory} on http://{host}:{port}")
    uvicorn.run(create_app(store, search_limit=settings.viewer.search_limit), host=host, port=port, log_level="warning")


@app.command()
def config() -> None:
    """Show current configuration."""
    settings = _load()
    print(f"Target URL: {settings.target.base_url}")
    print(f"Email: {settings.target.email or '(not set)'}")
    print(f"Password: {'(set)' if settings.target.get_password() else '(not set)'}")
    print(f"Docs secret: {'(set)' if settings.target.get_docs_secret() else '(not set)'}")
    print(f"Output dir: {settings.output.root}")
    print(f"Auth file: {settings.output.auth_file}")
    print(f"Guides dir: {settings.get_guides_dir()}")
    print(f"Headless: {settings.browser.headless}")
    print(f"Viewport: {settings.browser.viewport_width}x{settings.browser.viewport_height}")
    print(f"Viewer: {settings.viewer.host}:{settings.viewer.port}")
    print(f"Log level: {settings.logging.level}")


if __name__ == "__main__":
    app()
