"""Benchmark dispatcher interface."""

from abc import ABC, abstractmethod


class BenchmarkDispatcher(ABC):
    """Abstract interface for driving registered models through benchmarking."""

    @abstractmethod
    async def submit(self, model_id: str) -> str:
        """Start benchmarking a registered model. Returns model_id."""
        ...

    @abstractmethod
    def in_flight(self) -> int:
        """Number of benchmark runs that have not finished yet."""
        ...

    @abstractmethod
    async def start(self) -> None:
        """Start the dispatcher."""
        ...

    @abstractmethod
    async def stop(self) -> None:
        """Stop the dispatcher gracefully."""
        ...
