class Service:
    """Base class for services. Dependencies are passed to the constructor."""

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""
