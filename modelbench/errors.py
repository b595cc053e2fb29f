"""Domain exceptions raised by the registry, synthesizer and report renderer."""


class ModelBenchError(Exception):
    """Base class for all recoverable benchmark-service errors."""


class SynthesisFailure(ModelBenchError):
    """A benchmark run did not produce metrics."""


class IncompleteDataError(ModelBenchError):
    """A report was requested for a model that has no metrics yet."""


class EmptySelectionError(ModelBenchError):
    """A comparison report was requested without any models to compare."""
