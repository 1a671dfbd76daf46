"""Seedable random byte source for the CXNN instruction."""

import secrets
from typing import Optional, Tuple

import jax
import jax.numpy as jnp


def new_key(seed: Optional[int] = None) -> jax.Array:
    """Create a PRNG key, seeded from OS entropy when no seed is given."""
    if seed is None:
        seed = secrets.randbits(31)
    return jax.random.PRNGKey(seed)


def random_byte(key: jax.Array) -> Tuple[jax.Array, int]:
    """Draw a uniform byte in [0, 256) and return it with the advanced key."""
    key, subkey = jax.random.split(key)
    value = jax.random.randint(subkey, shape=(), minval=0, maxval=256, dtype=jnp.int32)
    return key, int(value)
