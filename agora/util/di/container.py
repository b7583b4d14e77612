"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container

from agora.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build production container (all prod implementations).

    Settings are loaded from environment variables automatically. Callers
    open a REQUEST scope per unit of work they serve:

        async with container() as request:
            use_case = await request.get(LikeUseCase)

    Returns:
        Configured DI container with production providers
    """
    provider_instances = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*provider_instances)
