"""
Per-thread evaluation context.

A :class:`PerThread` owns the pseudo-random generator state and a scratch
buffer for one OS thread. Nothing in this module is synchronized; create one
instance per thread. Random draws are delegated to a numpy
:class:`numpy.random.Generator`; the true random source reads the operating
system's cryptographic generator through :mod:`secrets`.
"""

import logging
import secrets
from typing import Optional, Sequence, Union

import numpy as np

from ..config.settings import get_config, RNG_TYPES


_BIT_GENERATORS = {
    "mt19937": np.random.MT19937,
    "pcg64": np.random.PCG64,
    "philox": np.random.Philox,
    "sfc64": np.random.SFC64,
}

_UINT32_MAX = 2 ** 32 - 1
_UINT64_MAX = 2 ** 64 - 1
_TWO_64_MINUS_1 = float(_UINT64_MAX)

Seed = Union[None, int, Sequence[int]]


class PerThread:
    """Random source and scratch memory for one thread.

    Parameters
    ----------
    rng_type : str, optional
        Bit generator name; defaults to the configured ``rng_type``
    seed : int or sequence of int, optional
        Seed material; defaults to the configured ``rng_seed``. ``None``
        draws fresh entropy.
    thread_id : int
        Identifier reported by :meth:`thread_id`
    """

    def __init__(self, rng_type: Optional[str] = None, seed: Seed = None, thread_id: int = 0):
        config = get_config()
        self.logger = logging.getLogger(self.__class__.__name__)
        self._thread_id = thread_id
        self._buffer_size = config.temporary_buffer_size
        self._buffer: Optional[bytearray] = None

        if rng_type is None:
            rng_type = config.rng_type
        if seed is None:
            seed = config.rng_seed
        self.configure(rng_type, seed)

    def configure(self, rng_type: str, seed: Seed = None) -> None:
        """Replace the generator.

        Parameters
        ----------
        rng_type : str
            One of ``mt19937``, ``pcg64``, ``philox`` or ``sfc64``
        seed : int or sequence of int, optional
            Seed material

        Raises
        ------
        ValueError
            If ``rng_type`` is unknown
        """
        rng_type = rng_type.lower()
        if rng_type not in _BIT_GENERATORS:
            raise ValueError(f"Unknown rng_type {rng_type!r}, expected one of {list(RNG_TYPES)}")

        self._rng_type = rng_type
        self._bit_generator = _BIT_GENERATORS[rng_type](np.random.SeedSequence(seed))
        self._generator = np.random.Generator(self._bit_generator)
        self.logger.debug(f"Configured {rng_type} generator (thread {self._thread_id})")

    def set_rng_type(self, rng_type: str) -> None:
        self.configure(rng_type)

    def rng_type(self) -> str:
        return self._rng_type

    def thread_id(self) -> int:
        return self._thread_id

    @property
    def generator(self) -> np.random.Generator:
        """The underlying numpy generator."""
        return self._generator

    def temporary_buffer(self) -> bytearray:
        """Return the scratch buffer, allocating it on first use."""
        if self._buffer is None:
            self._buffer = bytearray(self._buffer_size)
        return self._buffer

    def temporary_buffer_size_in_bytes(self) -> int:
        return self._buffer_size

    # Raw integers ------------------------------------------------------------

    def _raw64(self) -> int:
        return int(self._generator.integers(0, _UINT64_MAX, dtype=np.uint64, endpoint=True))

    def random64(self) -> int:
        """Return 64 random bits as a signed 64-bit integer."""
        raw = self._raw64()
        return raw - (1 << 64) if raw >= (1 << 63) else raw

    def random32(self) -> int:
        """Return 32 random bits as a non-negative integer."""
        return int(self._generator.integers(0, _UINT32_MAX, dtype=np.uint32, endpoint=True))

    def trng(self) -> int:
        """Return 32 bits from the operating system's cryptographic generator."""
        return secrets.randbits(32)

    # Uniform reals -----------------------------------------------------------

    def random_inclusive(self) -> float:
        """Uniform deviate over [0, 1]."""
        return self._raw64() / _TWO_64_MINUS_1

    def random_exclusive(self) -> float:
        """Uniform deviate over (0, 1)."""
        while True:
            value = self._generator.random()
            if value != 0.0:
                return value

    def random_inclusive_exclusive(self) -> float:
        """Uniform deviate over [0, 1)."""
        return self._generator.random()

    def random_exclusive_inclusive(self) -> float:
        """Uniform deviate over (0, 1]."""
        return 1.0 - self._generator.random()

    # Distributions -----------------------------------------------------------
    # Parameters are validated by the callers in the deviates module.

    def random_normal(self, mean: float = 0.0, sigma: float = 1.0) -> float:
        return float(self._generator.normal(mean, sigma))

    def random_gamma(self, k: float, s: float = 1.0) -> float:
        return float(self._generator.gamma(k, s))

    def random_weibull(self, scale: float, shape: float, delay: float = 0.0) -> float:
        return scale * float(self._generator.weibull(shape)) + delay

    def random_exponential(self, rate: float) -> float:
        return float(self._generator.exponential(1.0 / rate))

    def random_rayleigh(self, scale: float) -> float:
        return float(self._generator.rayleigh(scale))

    def random_chi_squared(self, k: float) -> float:
        return float(self._generator.chisquare(k))

    def random_poisson(self, rate: float) -> int:
        return int(self._generator.poisson(rate))

    def random_binomial(self, n: int, p: float) -> int:
        return int(self._generator.binomial(n, p))

    def random_log_normal(self, mean: float = 0.0, sigma: float = 1.0) -> float:
        return float(self._generator.lognormal(mean, sigma))

    def random_geometric(self, p: float) -> int:
        """Number of trials up to and including the first success."""
        return int(self._generator.geometric(p))

    def random_cauchy_lorentz(self, location: float, scale: float) -> float:
        return location + scale * float(self._generator.standard_cauchy())
