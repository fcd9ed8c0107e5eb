import asyncio
import contextlib
from logging import Logger
from typing import Literal

import click
import uvicorn
from fastmcp import FastMCP
from fastmcp.server.middleware.logging import LoggingMiddleware
from fastmcp.utilities.logging import configure_logging, get_logger

from devsignal.clients.github import GitHubProxyClient
from devsignal.clients.gitlab import GitLabProxyClient
from devsignal.dashboard.render import render_dashboard
from devsignal.dashboard.scheduler import RefreshScheduler
from devsignal.dashboard.sources import DeveloperDataSource, ProxyDataSource, UpstreamDataSource
from devsignal.dashboard.views import Dashboard
from devsignal.models.dashboard import TABS, Tab
from devsignal.proxy.app import create_http_app
from devsignal.proxy.routes import ProxyServer
from devsignal.servers.dashboard import DashboardServer
from devsignal.settings import DEFAULT_GITHUB_USERNAME, DEFAULT_GITLAB_USERNAME, REFRESH_INTERVAL_SECONDS, get_port

logger: Logger = get_logger(name=__name__)

mcp: FastMCP[None] = FastMCP[None](name="DevSignal")

mcp.add_middleware(middleware=LoggingMiddleware(include_payloads=True, logger=logger))

# One pair of upstream clients serves both the proxy routes and the MCP tools
github_client: GitHubProxyClient = GitHubProxyClient(logger=logger)
gitlab_client: GitLabProxyClient = GitLabProxyClient(logger=logger)

proxy_server: ProxyServer = ProxyServer(github_client=github_client, gitlab_client=gitlab_client, logger=logger)
_ = proxy_server.register_routes(fastmcp=mcp)

dashboard_server: DashboardServer = DashboardServer(
    data_source=UpstreamDataSource(github_client=github_client, gitlab_client=gitlab_client),
    logger=logger,
)
_ = dashboard_server.register_tools(fastmcp=mcp)


@click.group()
@click.option("--log-level", default="INFO", show_default=True, help="The level to log at.")
def cli(log_level: str):
    configure_logging(level=log_level.upper())  # pyright: ignore[reportArgumentType]


@cli.command()
@click.option("--host", default="0.0.0.0", show_default=True, help="The interface to listen on.")  # noqa: S104
@click.option("--port", type=int, default=None, help="The port to listen on. Defaults to $PORT or 3000.")
@click.option(
    "--transport",
    type=click.Choice(["http", "stdio"]),
    default="http",
    show_default=True,
    help="Serve the proxy and MCP endpoint over HTTP, or only the MCP tools over stdio.",
)
def serve(host: str, port: int | None, transport: Literal["http", "stdio"]):
    """Run the proxy service."""

    if transport == "stdio":
        asyncio.run(serve_stdio())
        return

    port = port or get_port()
    logger.info(f"Server running on port {port}")

    uvicorn.run(create_http_app(fastmcp=mcp, on_shutdown=[gitlab_client.aclose]), host=host, port=port)


async def serve_stdio() -> None:
    try:
        await mcp.run_async(transport="stdio")
    finally:
        await gitlab_client.aclose()


async def run_dashboard(dashboard: Dashboard, interval: float, once: bool) -> None:
    async def refresh_and_render() -> None:
        await dashboard.refresh_all()
        if not once:
            click.clear()
        click.echo(render_dashboard(dashboard))

    try:
        if once:
            await refresh_and_render()
            return

        async with RefreshScheduler(callback=refresh_and_render, interval=interval):
            _ = await asyncio.Event().wait()
    finally:
        await dashboard.data_source.aclose()


@cli.command()
@click.option("--api-base-url", default=None, help="The URL of a running proxy. When omitted, GitHub and GitLab are called directly.")
@click.option("--tab", type=click.Choice(TABS), default="financial", show_default=True, help="The tab to display.")
@click.option("--github-user", default=DEFAULT_GITHUB_USERNAME, show_default=True, help="The GitHub user to show.")
@click.option("--gitlab-user", default=DEFAULT_GITLAB_USERNAME, show_default=True, help="The GitLab user to show.")
@click.option("--interval", type=float, default=REFRESH_INTERVAL_SECONDS, show_default=True, help="Seconds between refreshes.")
@click.option("--once", is_flag=True, help="Render a single refresh and exit.")
def dashboard(api_base_url: str | None, tab: Tab, github_user: str, gitlab_user: str, interval: float, once: bool):
    """Show the dashboard in the terminal, refreshing until interrupted."""

    data_source: DeveloperDataSource = ProxyDataSource(base_url=api_base_url) if api_base_url else UpstreamDataSource()

    terminal_dashboard = Dashboard(data_source=data_source, github_username=github_user, gitlab_username=gitlab_user, active_tab=tab)

    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(run_dashboard(dashboard=terminal_dashboard, interval=interval, once=once))


if __name__ == "__main__":
    cli()
