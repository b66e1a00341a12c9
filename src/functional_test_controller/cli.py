"""Command line interface for functional-test-controller."""

from __future__ import annotations

import asyncio
import base64
import logging
from dataclasses import dataclass
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from pathlib import Path
from typing import Annotated, Optional

import typer
from playwright.async_api import Error as PlaywrightError
from rich.console import Console

from .config import ControllerConfig, load_config
from .controller.base import ControllerError
from .factory import build_launcher

app = typer.Typer(help="Functional test controller entry point")


@dataclass
class ProbeResult:
    """What a probe observed on the page."""

    url: str
    title: str
    text: Optional[str] = None
    screenshot: Optional[bytes] = None


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Configure logging before executing any command."""

    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


@app.command()
def version() -> None:
    """Print the package version."""

    try:
        typer.echo(get_version("functional-test-controller"))
    except PackageNotFoundError:  # pragma: no cover - when running from source tree
        typer.echo("0.0.0")


@app.command()
def probe(
    url: Annotated[str, typer.Argument(help="Page to open.")],
    selector: Annotated[
        Optional[str],
        typer.Option("--selector", "-s", help="Print the text of the first matching element."),
    ] = None,
    screenshot: Annotated[
        Optional[Path],
        typer.Option("--screenshot", help="Write a PNG of the viewport to this path."),
    ] = None,
    config_path: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to YAML configuration."),
    ] = None,
    env_file: Annotated[
        Optional[Path],
        typer.Option("--env-file", help="Path to an .env file with default configuration values."),
    ] = None,
    browser: Annotated[
        Optional[str],
        typer.Option("--browser", help="Browser to drive."),
    ] = None,
    headless: Annotated[
        Optional[bool],
        typer.Option("--headless/--headed", help="Run the browser in headless mode (or headed)."),
    ] = None,
) -> None:
    """Open a page and report what a test would see there."""

    console = Console()
    config = load_config(
        config_path, env_file=env_file, browser_name=browser, headless=headless
    )
    try:
        result = asyncio.run(
            _probe(config, url, selector=selector, capture=screenshot is not None)
        )
    except (PlaywrightError, ControllerError, asyncio.TimeoutError, ValueError) as exc:
        console.print(f"Probe failed: {exc}", style="red", markup=False)
        raise typer.Exit(code=1) from exc

    console.print(f"URL: {result.url}", markup=False)
    console.print(f"Title: {result.title}", markup=False)
    if result.text is not None:
        console.print(f"Text: {result.text}", markup=False)
    if screenshot is not None and result.screenshot is not None:
        screenshot.parent.mkdir(parents=True, exist_ok=True)
        screenshot.write_bytes(result.screenshot)
        console.print(f"Screenshot: {screenshot}", markup=False)


async def _probe(
    config: ControllerConfig,
    url: str,
    *,
    selector: Optional[str] = None,
    capture: bool = False,
) -> ProbeResult:
    launcher = build_launcher(config)
    controller = await launcher.start()
    try:
        await controller.navigate_to(url)
        result = ProbeResult(
            url=await controller.get_current_url(),
            title=await controller.get_title(),
        )
        if selector:
            handle = await controller.find_element(selector)
            result.text = await controller.get_element_text(handle)
        if capture:
            result.screenshot = base64.b64decode(await controller.take_screenshot())
        return result
    finally:
        await launcher.stop()


if __name__ == "__main__":
    app()
