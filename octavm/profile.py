"""Quirk profiles selecting the behavior of ambiguous CHIP-8 instructions."""

from chex import dataclass


@dataclass(frozen=True, mappable_dataclass=False)
class QuirkProfile:
    """Behavior toggles for instructions whose semantics changed over time.

    Attributes:
        shr_copies_vy: 8XY6 copies VY into VX before shifting right
        shl_copies_vy: 8XYE copies VY into VX before shifting left
        store_dump_advances_i: FX55 leaves I pointing past the last stored byte
        store_load_advances_i: FX65 leaves I pointing past the last loaded byte
    """
    shr_copies_vy: bool = False
    shl_copies_vy: bool = False
    store_dump_advances_i: bool = False
    store_load_advances_i: bool = False

    @classmethod
    def original(cls) -> "QuirkProfile":
        """COSMAC VIP interpreter behavior."""
        return cls(
            shr_copies_vy=True,
            shl_copies_vy=True,
            store_dump_advances_i=True,
            store_load_advances_i=True,
        )

    @classmethod
    def modern(cls) -> "QuirkProfile":
        """CHIP-48 / SUPER-CHIP era behavior expected by most modern ROMs."""
        return cls(
            shr_copies_vy=False,
            shl_copies_vy=False,
            store_dump_advances_i=False,
            store_load_advances_i=False,
        )


ORIGINAL = QuirkProfile.original()
MODERN = QuirkProfile.modern()

PROFILES = {
    "original": ORIGINAL,
    "modern": MODERN,
}


def get_profile(name: str) -> QuirkProfile:
    """Get a named quirk profile.

    Args:
        name: Profile name ("original" or "modern")

    Returns:
        The matching QuirkProfile
    """
    if name not in PROFILES:
        raise ValueError(
            f"Unknown quirk profile '{name}'. Available: {list(PROFILES.keys())}"
        )
    return PROFILES[name]
