"""Run local agent CLIs (gemini, claude, codex, qwen) as one-shot subprocesses.

Used by the relay. If a ``cli_caller.py`` helper script is configured the
agents are invoked through it; otherwise each agent binary is called directly
in its non-interactive mode.
"""

import logging
import os
import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from wanderword.errors import BackendTimeoutError, UpstreamError
from wanderword.providers import cli_agent_names

logger = logging.getLogger(__name__)

# Seconds the subprocess may run beyond the agent's own timeout
PROCESS_GRACE_S = 30

# Env var overrides for the agent executables
_COMMAND_ENV = {
    "gemini": "GEMINI_CLI_CMD",
    "claude": "CLAUDE_CODE_CMD",
    "codex": "CODEX_CLI_CMD",
    "qwen": "QWEN_CLI_CMD",
}


@dataclass
class CliResult:
    returncode: int
    stdout: str
    stderr: str

    @property
    def succeeded(self) -> bool:
        """Exit 0, or any stdout at all, counts as an answer."""
        return self.returncode == 0 or bool(self.stdout)


def find_cli_caller(configured: Optional[str] = None) -> Optional[Path]:
    """Locate the optional cli_caller.py helper.

    Order of precedence:
    1. Explicitly configured path
    2. $CLI_AGENTS_PATH/cli_caller.py
    3. ~/.claude/skills/cli-agents/cli_caller.py
    """
    if configured:
        path = Path(configured).expanduser()
        return path if path.exists() else None

    agents_dir = os.environ.get("CLI_AGENTS_PATH") or str(
        Path.home() / ".claude" / "skills" / "cli-agents"
    )
    path = Path(agents_dir) / "cli_caller.py"
    return path if path.exists() else None


def resolve_executable(agent: str) -> list[str]:
    """Resolve an agent command to an argv prefix, handling Windows shims."""
    cmd = os.environ.get(_COMMAND_ENV.get(agent, ""), agent)
    if os.path.isabs(cmd):
        resolved = cmd
    else:
        resolved = shutil.which(cmd) or ""

    # Try common Windows shim names if direct resolution fails
    if not resolved and os.name == "nt":
        resolved = shutil.which(f"{cmd}.ps1") or shutil.which(f"{cmd}.cmd") or ""

    if resolved.lower().endswith(".ps1"):
        return ["powershell", "-NoProfile", "-ExecutionPolicy", "Bypass", "-File", resolved]

    return [resolved or cmd]


def build_command(
    agent: str, prompt: str, timeout: float, cli_caller: Optional[Path] = None
) -> list[str]:
    """Build the argv for one agent call. Never goes through a shell."""
    if agent not in cli_agent_names():
        raise ValueError(f"Unknown CLI agent: {agent}")

    if cli_caller is not None:
        return [
            sys.executable,
            str(cli_caller),
            "--model",
            agent,
            "--prompt",
            prompt,
            "--timeout",
            str(int(timeout)),
        ]

    base = resolve_executable(agent)
    if agent == "codex":
        return base + ["exec", prompt]
    if agent in ("gemini", "claude"):
        return base + ["-p", prompt, "--output-format", "text"]
    return base + ["-p", prompt]


def run_cli_agent(
    agent: str, prompt: str, timeout: float = 60, cli_caller: Optional[Path] = None
) -> CliResult:
    """Run one agent call to completion and capture its output.

    Raises:
        ValueError: Unknown agent name
        BackendTimeoutError: The process outlived timeout + PROCESS_GRACE_S
        UpstreamError: The executable could not be started
    """
    args = build_command(agent, prompt, timeout, cli_caller)
    logger.debug(f"[CLI] Running {agent} via {args[0]} (timeout={timeout}s)")

    creationflags = 0
    if os.name == "nt":
        creationflags = subprocess.CREATE_NO_WINDOW

    try:
        proc = subprocess.run(
            args,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout + PROCESS_GRACE_S,
            creationflags=creationflags,
        )
    except subprocess.TimeoutExpired:
        raise BackendTimeoutError(f"{agent} CLI timed out after {timeout + PROCESS_GRACE_S:.0f}s")
    except FileNotFoundError:
        cmd_env = _COMMAND_ENV.get(agent)
        raise UpstreamError(f"{agent} CLI not found. Install it or set {cmd_env} to its full path.")
    except OSError as e:
        raise UpstreamError(f"Failed to start {agent} CLI: {e}")

    return CliResult(proc.returncode, proc.stdout or "", proc.stderr or "")
