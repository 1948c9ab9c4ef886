"""
Attribution Model Registry

Static, read-only catalog of the six attribution models offered by the
analytics views. Each entry carries the display name, the credit rule, the
static parameters the calculator uses, and the accuracy score reported next
to the model in the dashboard.

Lookup is an explicit mapping from algorithm key to definition. Keys that
are not in the catalog resolve to DEFAULT_ALGORITHM (data_driven); callers
that need to report the substitution use resolve_model(), which returns a
flag alongside the definition.
"""

from typing import Dict, List, Optional, Tuple, Union

from revops_analytics.models.enums import AttributionAlgorithm
from revops_analytics.models.schemas import AttributionModelDefinition


# =============================================================================
# Constants
# =============================================================================

# Model used when a requested key is unknown.
DEFAULT_ALGORITHM: AttributionAlgorithm = AttributionAlgorithm.DATA_DRIVEN

# Weekly decay rate of the time_decay model. Fixed; not caller-configurable.
TIME_DECAY_RATE: float = 0.7

# Catalog in dashboard display order (data_driven first).
MODEL_REGISTRY: Dict[AttributionAlgorithm, AttributionModelDefinition] = {
    AttributionAlgorithm.DATA_DRIVEN: AttributionModelDefinition(
        name="Data-Driven Attribution",
        description="ML-based model using conversion path analysis",
        algorithm=AttributionAlgorithm.DATA_DRIVEN,
        weights={},
        accuracy=0.91,
    ),
    AttributionAlgorithm.POSITION_BASED: AttributionModelDefinition(
        name="Position-Based Attribution",
        description="40% first touch, 40% last touch, 20% middle",
        algorithm=AttributionAlgorithm.POSITION_BASED,
        weights={"first": 0.4, "last": 0.4, "middle": 0.2},
        accuracy=0.78,
    ),
    AttributionAlgorithm.TIME_DECAY: AttributionModelDefinition(
        name="Time Decay Attribution",
        description="Higher weight to recent touchpoints",
        algorithm=AttributionAlgorithm.TIME_DECAY,
        weights={"decay_rate": TIME_DECAY_RATE},
        accuracy=0.82,
    ),
    AttributionAlgorithm.LINEAR: AttributionModelDefinition(
        name="Linear Attribution",
        description="Equal credit to all touchpoints",
        algorithm=AttributionAlgorithm.LINEAR,
        weights={},
        accuracy=0.65,
    ),
    AttributionAlgorithm.FIRST_TOUCH: AttributionModelDefinition(
        name="First Touch Attribution",
        description="100% credit to first interaction",
        algorithm=AttributionAlgorithm.FIRST_TOUCH,
        weights={"first": 1.0},
        accuracy=0.45,
    ),
    AttributionAlgorithm.LAST_TOUCH: AttributionModelDefinition(
        name="Last Touch Attribution",
        description="100% credit to last interaction",
        algorithm=AttributionAlgorithm.LAST_TOUCH,
        weights={"last": 1.0},
        accuracy=0.52,
    ),
}


# =============================================================================
# Lookup
# =============================================================================


def list_models() -> List[AttributionModelDefinition]:
    """Return every model definition in display order."""
    return list(MODEL_REGISTRY.values())


def _parse_algorithm(key: Union[str, AttributionAlgorithm, None]) -> Optional[AttributionAlgorithm]:
    if isinstance(key, AttributionAlgorithm):
        return key
    if key is None:
        return None
    try:
        return AttributionAlgorithm(key.strip().lower())
    except ValueError:
        return None


def resolve_model(
    key: Union[str, AttributionAlgorithm, None]
) -> Tuple[AttributionModelDefinition, bool]:
    """
    Resolve an algorithm key to its definition.

    Args:
        key: Algorithm key such as "time_decay", or an AttributionAlgorithm.

    Returns:
        Tuple of (definition, fell_back). fell_back is True when the key was
        missing or unknown and the DEFAULT_ALGORITHM definition was returned.

    Example:
        >>> model, fell_back = resolve_model("linear")
        >>> model.accuracy, fell_back
        (0.65, False)
        >>> resolve_model("markov")[1]
        True
    """
    algorithm = _parse_algorithm(key)
    if algorithm is None:
        return MODEL_REGISTRY[DEFAULT_ALGORITHM], True
    return MODEL_REGISTRY[algorithm], False


def get_model(key: Union[str, AttributionAlgorithm, None]) -> AttributionModelDefinition:
    """Return the definition for key, or the default model's definition."""
    return resolve_model(key)[0]
