"""CLI entry point for shop-smoke."""

import asyncio
from dataclasses import replace
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from .config import Config, load_config
from .log import setup_logging
from .selectors import SELECTORS, Resolved, SelectorResolver, get_selector
from .viewport import classify_viewport

console = Console()


@click.group()
@click.version_option(package_name="shop-smoke")
@click.option("--config", "-c", "config_path", type=click.Path(exists=True), help="Config file path")
@click.option("--log-level", default=None, help="Override the configured log level")
@click.pass_context
def main(ctx: click.Context, config_path: str | None, log_level: str | None) -> None:
    """shop-smoke - storefront smoke-test helpers."""
    ctx.ensure_object(dict)
    
    config = load_config(Path(config_path) if config_path else None)
    setup_logging(log_level or config.log_level)
    ctx.obj["config"] = config


@main.command("selectors")
def list_selectors() -> None:
    """List every registered selector and its fallback chain."""
    table = Table(title="Selector Registry")
    table.add_column("Name", style="cyan")
    table.add_column("Primary", style="green", max_width=45)
    table.add_column("Fallbacks", justify="right")
    table.add_column("Timeout", justify="right", style="dim")
    
    for name, selector in sorted(SELECTORS.items()):
        table.add_row(name, selector.primary, str(len(selector.fallback)), f"{selector.timeout_ms}ms")
    
    console.print(table)


@main.command()
@click.argument("width", type=click.IntRange(min=0))
@click.argument("height", type=click.IntRange(min=0), default=1080)
def viewport(width: int, height: int) -> None:
    """Show which responsive category a viewport size falls into."""
    info = classify_viewport(width, height)
    console.print(f"[bold]{width}x{height}[/] → [cyan]{info.category}[/]")


@main.command()
@click.option("--path", "-p", "url_path", default="/", help="Storefront path to open")
@click.option("--name", "-n", "names", multiple=True, help="Only check these selectors")
@click.option("--timeout", "timeout_ms", type=click.IntRange(min=1), default=2000, help="Per-candidate timeout (ms)")
@click.pass_context
def inspect(ctx: click.Context, url_path: str, names: tuple[str, ...], timeout_ms: int) -> None:
    """Open the store and report which selectors resolve via primary, fallback, or not at all."""
    config: Config = ctx.obj["config"]
    
    try:
        selected = {name: get_selector(name) for name in names} if names else dict(SELECTORS)
    except KeyError as e:
        raise click.BadParameter(str(e.args[0]), param_hint="--name") from None
    
    url = config.url(url_path)
    console.print(f"\n[bold blue]🔍 Inspecting selectors on:[/] {url}\n")
    
    with console.status("[yellow]Resolving selectors...[/]"):
        results = asyncio.run(_inspect(config, url, selected, timeout_ms))
    
    table = Table(title="Selector Drift Report")
    table.add_column("Name", style="cyan")
    table.add_column("Result")
    table.add_column("Matched expression", style="dim", max_width=50)
    
    drifted = missing = 0
    for name, result in results.items():
        if isinstance(result, Resolved) and not result.used_fallback:
            table.add_row(name, "[green]primary[/]", result.expression)
        elif isinstance(result, Resolved):
            drifted += 1
            table.add_row(name, f"[yellow]fallback #{result.index}[/]", result.expression)
        else:
            missing += 1
            table.add_row(name, "[red]not found[/]", "-")
    
    console.print(table)
    console.print("\n[bold]Summary:[/]")
    console.print(f"  • Drifted to fallback: [yellow]{drifted}[/]")
    console.print(f"  • Not found: [red]{missing}[/]\n")
    
    if missing:
        ctx.exit(1)


async def _inspect(config: Config, url: str, selected: dict, timeout_ms: int) -> dict:
    from playwright.async_api import async_playwright
    
    async with async_playwright() as playwright:
        browser = await getattr(playwright, config.browser.name).launch(headless=config.browser.headless)
        try:
            page = await browser.new_page(
                viewport={
                    "width": config.browser.viewport_width,
                    "height": config.browser.viewport_height,
                },
            )
            await page.goto(url, wait_until="load", timeout=config.timeouts.navigation_ms)
            
            resolver = SelectorResolver(page)
            return {
                name: await resolver.try_resolve(replace(selector, timeout_ms=timeout_ms))
                for name, selector in sorted(selected.items())
            }
        finally:
            await browser.close()


if __name__ == "__main__":
    main()
