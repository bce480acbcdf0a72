"""Error taxonomy for the neuron core

Three kinds of failure exist, none of them retried:
- InvalidNumericInput: text typed into a field could not be read as a number.
  Always recovered by substituting a default or clamped value.
- UnknownFunctionError: a registry lookup for a name that was never registered.
- InvariantViolation: an operation that would break a structural rule
  (e.g. removing the last input). Rejected as a no-op.
"""


class NeuronLabError(Exception):
    """Base class for all neuron core errors"""


class InvalidNumericInput(NeuronLabError, ValueError):
    def __init__(self, raw):
        self.raw = raw
        super().__init__(f"Not a finite number: {raw!r}")


class UnknownFunctionError(NeuronLabError, KeyError):
    def __init__(self, kind: str, name, available):
        self.kind = kind
        self.name = name
        self.available = list(available)
        super().__init__(name)

    def __str__(self):
        return (
            f"Unknown {self.kind} function '{self.name}'. "
            f"Available: {', '.join(self.available)}"
        )


class InvariantViolation(NeuronLabError, ValueError):
    """Raised when an operation would leave the neuron in an invalid shape"""
