"""Dependency injection container."""

from typing import Iterable

import logfire
from dishka import AsyncContainer, Provider, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka

from pickme.util.di import PROVIDERS, get_provider


def assemble_container(providers: Iterable[Provider]) -> AsyncContainer:
    """Build a container from provider instances plus the FastAPI bridge.

    Shared by the production and test builders so both resolve the same
    graph: config, persistence (Postgres or in-memory), domain services and
    application services.
    """
    instances = list(providers)
    logfire.debug(
        "Assembling DI container",
        providers=[type(p).__name__ for p in instances],
    )
    return make_async_container(*instances, FastapiProvider())


def create_container() -> AsyncContainer:
    """Build production container (all prod implementations).

    Settings are loaded from environment variables automatically.
    """
    return assemble_container(
        get_provider(base, use_mock=False)() for base in PROVIDERS
    )


def setup_di(app, container: AsyncContainer) -> None:
    """Attach the container to the FastAPI app so routes can use FromDishka."""
    setup_dishka(container, app)
