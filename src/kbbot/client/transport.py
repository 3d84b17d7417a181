from __future__ import annotations

import asyncio
import contextlib
import json
from pathlib import Path
from typing import Any, Protocol

from kbbot.core.console import get_logger
from kbbot.core.result import Err, Ok, Result, TransportError

logger = get_logger(__name__)

API_VERSION = 1


class CommandTransport(Protocol):
    """Anything that can carry a namespaced API call to keybase."""

    async def run_api_command(self, api_name: str, method: str, options: Any) -> Any: ...

    async def status(self) -> dict[str, Any]: ...


def _build_request(method: str, options: Any) -> bytes:
    payload = {"method": method, "params": {"version": API_VERSION, "options": options}}
    return json.dumps(payload).encode("utf-8")


def _parse_json(raw: str, context: dict[str, Any]) -> Result[Any, TransportError]:
    try:
        return Ok(json.loads(raw))
    except json.JSONDecodeError as exc:
        return Err(
            TransportError(
                "keybase returned invalid JSON", context={**context, "error": str(exc)}
            )
        )


def _unwrap_envelope(output: Any, context: dict[str, Any]) -> Result[Any, TransportError]:
    """Pull ``result`` out of an API response, turning ``error`` into an Err."""
    if not isinstance(output, dict):
        return Err(TransportError("keybase returned a non-object response", context=context))

    error = output.get("error")
    if error:
        if isinstance(error, dict):
            message = str(error.get("message") or "keybase API error")
            code = error.get("code")
        else:
            message, code = str(error), None
        return Err(TransportError(message, context={**context, "code": code}))

    return Ok(output.get("result"))


class KeybaseTransport:
    """Async keybase JSON API wrapper built on subprocess plumbing."""

    def __init__(
        self,
        binary: str = "keybase",
        home_dir: Path | None = None,
        timeout: float | None = None,
    ) -> None:
        self._binary = binary
        self._home_dir = home_dir
        self._timeout = timeout

    @property
    def home_dir(self) -> Path | None:
        return self._home_dir

    def _argv(self, *args: str) -> list[str]:
        argv = [self._binary]
        if self._home_dir is not None:
            argv.extend(["--home", str(self._home_dir)])
        argv.extend(args)
        return argv

    async def _run_keybase(self, *args: str, stdin: bytes | None = None) -> Result[str, TransportError]:
        """Run keybase with asyncio and return stdout as text, wrapping failures."""
        argv = self._argv(*args)
        logger.debug("Running %s", " ".join(argv))

        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                stdin=asyncio.subprocess.PIPE if stdin is not None else asyncio.subprocess.DEVNULL,
            )
        except FileNotFoundError:
            return Err(
                TransportError("keybase executable not found", context={"binary": self._binary})
            )
        except OSError as exc:
            return Err(
                TransportError(
                    "Failed to start keybase",
                    context={"args": list(args), "error": str(exc)},
                )
            )

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(input=stdin), timeout=self._timeout
            )
        except asyncio.TimeoutError:
            with contextlib.suppress(ProcessLookupError):
                process.kill()
            await process.wait()
            logger.debug("keybase %s timed out after %ss", " ".join(args), self._timeout)
            return Err(
                TransportError(
                    "keybase call timed out",
                    context={"args": list(args), "timeout": self._timeout},
                )
            )

        if process.returncode != 0:
            message = stderr.decode("utf-8", errors="replace").strip()
            stdout_text = stdout.decode("utf-8", errors="replace").strip()
            detail = message or stdout_text or f"keybase {' '.join(args)} failed"
            logger.debug("keybase exited with status %s: %s", process.returncode, detail)
            return Err(
                TransportError(
                    detail,
                    context={"args": list(args), "returncode": process.returncode},
                )
            )

        return Ok(stdout.decode("utf-8", errors="replace"))

    async def run_api_command(self, api_name: str, method: str, options: Any) -> Any:
        """Send one JSON API request and return the response's ``result`` member.

        Raises:
            TransportError: when the process fails or the API reports an error.
        """
        context = {"api": api_name, "method": method}
        match await self._run_keybase(api_name, "api", stdin=_build_request(method, options)):
            case Ok(raw):
                result = _parse_json(raw, context).and_then(
                    lambda output: _unwrap_envelope(output, context)
                )
            case Err(err):
                err.context.update(context)
                result = Err(err)
        return result.unwrap()

    async def status(self) -> dict[str, Any]:
        """Return the parsed output of ``keybase status --json``."""
        context = {"command": "status"}
        raw = (await self._run_keybase("status", "--json")).unwrap()
        output = _parse_json(raw, context).unwrap()
        if not isinstance(output, dict):
            raise TransportError("keybase status returned a non-object response", context=context)
        return output


__all__ = ["API_VERSION", "CommandTransport", "KeybaseTransport"]
