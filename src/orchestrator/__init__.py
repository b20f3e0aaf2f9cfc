"""Runtime plumbing shared by the generator, the solver and the CLI."""

from .log import append_event, configure, configure_logging, fatal
from .sampling import derive_seed, make_rng, shuffle, shuffled_range

__all__ = [
    "append_event",
    "configure",
    "configure_logging",
    "derive_seed",
    "fatal",
    "make_rng",
    "shuffle",
    "shuffled_range",
]
