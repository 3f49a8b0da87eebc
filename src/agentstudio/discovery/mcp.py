"""MCP server discovery from Claude and OpenCode configuration files.

Sources:
    ``~/.claude.json``           ``{"mcpServers": {...}}``, user scope
    ``<project>/.mcp.json``      ``{"mcpServers": {...}}`` or a bare map
                                 of server name to config, project scope
    ``opencode.json[c]``         ``{"mcp": {...}}``; ``command`` may be an
                                 array of executable plus arguments and the
                                 environment lives under ``environment``
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from agentstudio.fsutil import generate_id, is_file
from agentstudio.models import McpScope, McpServerConfig, McpServerEntity, Scope, Tool, Transport
from agentstudio.parsers.jsonc import load_json, load_jsonc

logger = logging.getLogger(__name__)

WRAPPER_KEY = "mcpServers"


# ---------------------------------------------------------------------------
# Normalisation
# ---------------------------------------------------------------------------


def infer_transport(server: dict[str, Any]) -> str:
    """Return the raw transport string for a server config.

    An explicit string ``type`` wins; otherwise ``command`` means stdio and
    ``url`` means http.
    """
    explicit = server.get("type")
    if isinstance(explicit, str):
        return explicit
    if "command" in server:
        return Transport.STDIO.value
    if "url" in server:
        return Transport.HTTP.value
    return Transport.UNKNOWN.value


def _str_list(value: Any) -> list[str] | None:
    if not isinstance(value, list):
        return None
    return [v if isinstance(v, str) else str(v) for v in value]


def _str_map(value: Any) -> dict[str, str] | None:
    if not isinstance(value, dict):
        return None
    return {str(k): v if isinstance(v, str) else str(v) for k, v in value.items()}


def _opt_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _claude_config(server: dict[str, Any]) -> McpServerConfig:
    return McpServerConfig(
        type=_opt_str(server.get("type")),
        command=_opt_str(server.get("command")),
        args=_str_list(server.get("args")),
        url=_opt_str(server.get("url")),
        env=_str_map(server.get("env")),
        headers=_str_map(server.get("headers")),
    )


def _opencode_config(server: dict[str, Any], transport: str) -> McpServerConfig:
    raw_command = server.get("command")
    if isinstance(raw_command, list):
        parts = _str_list(raw_command) or []
        command = parts[0] if parts else None
        args: list[str] | None = parts[1:]
    else:
        command = _opt_str(raw_command)
        args = _str_list(server.get("args"))

    env_value = server.get("environment")
    if env_value is None:
        env_value = server.get("env")

    return McpServerConfig(
        type=transport,
        command=command,
        args=args,
        url=_opt_str(server.get("url")),
        env=_str_map(env_value),
        headers=_str_map(server.get("headers")),
    )


def _claude_servers(
    servers: dict[str, Any],
    scope: McpScope,
    id_prefix: str,
    source_path: Path,
) -> list[McpServerEntity]:
    entities: list[McpServerEntity] = []
    for name, server in servers.items():
        if name == WRAPPER_KEY or not isinstance(server, dict):
            continue
        transport = infer_transport(server)
        entities.append(
            McpServerEntity(
                id=generate_id("mcp", f"{id_prefix}{name}"),
                name=name,
                scope=scope,
                transport=Transport.parse(transport),
                config=_claude_config(server),
                source_path=str(source_path),
                tool=Tool.CLAUDE,
            )
        )
    return entities


# ---------------------------------------------------------------------------
# Discoverers
# ---------------------------------------------------------------------------


def discover_mcp_from_claude_json(claude_json: Path) -> list[McpServerEntity]:
    """Read user-scope servers from ``~/.claude.json``."""
    config = load_json(claude_json)
    if not isinstance(config, dict):
        return []
    servers = config.get(WRAPPER_KEY)
    if not isinstance(servers, dict):
        return []
    return _claude_servers(servers, McpScope.USER, "user_", claude_json)


def discover_mcp_from_project(project_dir: Path) -> list[McpServerEntity]:
    """Read project-scope servers from ``<project_dir>/.mcp.json``.

    The file may wrap servers in ``mcpServers`` or be a bare map. The bare
    form is only used when the wrapper key is absent, and a literal
    ``mcpServers`` key inside it is ignored.
    """
    mcp_json = project_dir / ".mcp.json"
    config = load_json(mcp_json)
    if not isinstance(config, dict):
        return []
    wrapped = config.get(WRAPPER_KEY)
    servers = wrapped if isinstance(wrapped, dict) else config
    return _claude_servers(servers, McpScope.PROJECT, f"project_{project_dir}_", mcp_json)


def discover_mcp_from_opencode(
    config_dir: Path,
    scope: Scope,
    project_path: str | None = None,
) -> list[McpServerEntity]:
    """Read servers from the ``mcp`` key of ``opencode.json`` (else ``opencode.jsonc``).

    Args:
        config_dir: Directory holding the OpenCode config file.
        scope: Discovery scope, carried into the entity's scope.
        project_path: Owning project, unused beyond logging.
    """
    json_path = config_dir / "opencode.json"
    jsonc_path = config_dir / "opencode.jsonc"
    if is_file(json_path):
        source, config = json_path, load_json(json_path)
    elif is_file(jsonc_path):
        source, config = jsonc_path, load_jsonc(jsonc_path)
    else:
        return []

    if not isinstance(config, dict):
        return []
    servers = config.get("mcp")
    if not isinstance(servers, dict):
        return []

    logger.debug("Reading OpenCode MCP servers from %s (project=%s)", source, project_path)
    mcp_scope = McpScope.GLOBAL if scope is Scope.GLOBAL else McpScope.PROJECT
    entities: list[McpServerEntity] = []
    for name, server in servers.items():
        if not isinstance(server, dict):
            continue
        transport = infer_transport(server)
        entities.append(
            McpServerEntity(
                id=generate_id("mcp", f"opencode_{scope.value}_{config_dir}_{name}"),
                name=name,
                scope=mcp_scope,
                transport=Transport.parse(transport),
                config=_opencode_config(server, transport),
                source_path=str(source),
                tool=Tool.OPENCODE,
            )
        )
    return entities
