"""Glue between synchronous click commands and the async handlers."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import click

from storeops.domain.exceptions import DomainException
from storeops.infrastructure.bootstrap import Repositories, open_backend
from storeops.infrastructure.settings import Settings

T = TypeVar("T")


def run_with_repositories(action: Callable[[Repositories], Awaitable[T]]) -> T:
    """Open the configured backend, run *action*, close the backend.

    Domain errors become ``click.ClickException`` so the user gets a
    one-line message and a non-zero exit code.
    """
    settings: Settings = click.get_current_context().obj

    async def _main() -> T:
        async with open_backend(settings) as repos:
            return await action(repos)

    try:
        return asyncio.run(_main())
    except DomainException as exc:
        raise click.ClickException(str(exc)) from exc
