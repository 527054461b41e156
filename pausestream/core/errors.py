class InvalidProducerKind(TypeError):
    """
    Raised at construction time when the object given as a producer is
    neither a zero-argument callable nor an iterator.
    """


class ProducerThrew(RuntimeError):
    """
    Raised inside the pump when pulling from the producer fails.

    It is never propagated to the caller of pause() or resume(): the pump
    delivers it on the error channel of the stream and stops pulling.
    """

    def __init__(self, original: Exception) -> None:
        super().__init__(f"Producer raised {type(original).__name__}: {original}")
        self.original = original
