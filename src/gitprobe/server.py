"""MCP stdio server exposing ``git_status`` and ``pr_info`` as tools."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from gitprobe import __version__
from gitprobe.config import GitProbeConfig, load_config
from gitprobe.git.runner import CommandRunner
from gitprobe.tools import error_record, git_status, pr_info

logger = logging.getLogger(__name__)

SERVER_NAME = "gitprobe"

_REPOSITORY_PATH = {
    "type": "string",
    "description": (
        "Absolute path to the git repository. "
        "Defaults to current working directory if not provided."
    ),
}


def _context_lines(default: int) -> Dict[str, Any]:
    return {
        "type": "integer",
        "minimum": 0,
        "description": f"Number of context lines to show in diff output. Defaults to {default}.",
        "default": default,
    }


class GitProbeServer:

    def __init__(self, config: Optional[GitProbeConfig] = None) -> None:
        self.config = config or GitProbeConfig()
        self._server = Server(SERVER_NAME, version=__version__)
        self._register_handlers()

    def _register_handlers(self) -> None:
        self._server.list_tools()(self._list_tools)
        self._server.call_tool()(self._call_tool)

    def _runner(self) -> CommandRunner:
        return CommandRunner(self.config.git.binary, self.config.git.timeout)

    async def _list_tools(self) -> List[Tool]:
        status_cfg, compare_cfg = self.config.status, self.config.compare
        return [
            Tool(
                name="git_status",
                description=(
                    "Get the complete status of a git repository including current branch, "
                    "staged files, unstaged changes, untracked files, and full unified diff. "
                    "Be sure to include the name of the current branch in the response."
                ),
                inputSchema={
                    "type": "object",
                    "properties": {
                        "repository_path": _REPOSITORY_PATH,
                        "include_untracked": {
                            "type": "boolean",
                            "description": "Include untracked files in the output. Defaults to true.",
                            "default": status_cfg.include_untracked,
                        },
                        "diff_context_lines": _context_lines(status_cfg.diff_context_lines),
                    },
                },
            ),
            Tool(
                name="pr_info",
                description=(
                    "Get pull request information by comparing the current branch with the "
                    "target branch. Returns PR title, description (commit messages), author "
                    "info, file changes, and full diff. Automatically detects main/master as "
                    "target branch or accepts custom target. If currently on the target "
                    "branch, returns an error indicating no PR is open."
                ),
                inputSchema={
                    "type": "object",
                    "properties": {
                        "repository_path": _REPOSITORY_PATH,
                        "target_branch": {
                            "type": "string",
                            "description": (
                                "Target branch to compare against. "
                                "Auto-detects main/master if not provided."
                            ),
                        },
                        "diff_context_lines": _context_lines(compare_cfg.diff_context_lines),
                    },
                },
            ),
        ]

    async def _call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> List[TextContent]:
        arguments = arguments or {}
        logger.info("tool call %s %s", name, arguments)
        handler = {
            "git_status": self._handle_git_status,
            "pr_info": self._handle_pr_info,
        }.get(name)
        if handler is None:
            record = error_record(f"Unknown tool: {name}")
        else:
            try:
                record = await asyncio.to_thread(handler, arguments)
            except (TypeError, ValueError) as exc:
                record = error_record(f"Invalid arguments for {name}: {exc}")
        return [TextContent(type="text", text=json.dumps(record))]

    def _handle_git_status(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        cfg = self.config.status
        include_untracked = arguments.get("include_untracked")
        context_lines = arguments.get("diff_context_lines")
        return git_status(
            arguments.get("repository_path"),
            include_untracked=cfg.include_untracked if include_untracked is None else bool(include_untracked),
            diff_context_lines=cfg.diff_context_lines if context_lines is None else int(context_lines),
            runner=self._runner(),
        )

    def _handle_pr_info(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        cfg = self.config.compare
        context_lines = arguments.get("diff_context_lines")
        return pr_info(
            arguments.get("repository_path"),
            target_branch=arguments.get("target_branch") or cfg.target_branch or None,
            diff_context_lines=cfg.diff_context_lines if context_lines is None else int(context_lines),
            runner=self._runner(),
        )

    async def run(self) -> None:
        async with stdio_server() as (read_stream, write_stream):
            await self._server.run(
                read_stream, write_stream, self._server.create_initialization_options()
            )


def main(config: Optional[GitProbeConfig] = None) -> None:
    if config is None:
        from gitprobe.log import configure_logging

        config = load_config()
        configure_logging(config.logging.level)
    logger.info("starting %s %s on stdio", SERVER_NAME, __version__)
    asyncio.run(GitProbeServer(config).run())
