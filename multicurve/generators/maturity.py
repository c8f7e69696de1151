"""
Maturity calculators placing curve nodes from instruments.
"""

from ..exceptions import InstrumentEvaluationError


def last_time(instrument) -> float:
    """Last time at which the instrument depends on a curve."""
    try:
        return float(instrument.last_time)
    except AttributeError:
        raise InstrumentEvaluationError(
            f"No last time for {type(instrument).__name__}"
        ) from None


def last_fixing_start_time(instrument) -> float:
    """Reference time of the last index fixing (price index instruments)."""
    try:
        return float(instrument.last_fixing_start_time)
    except AttributeError:
        raise InstrumentEvaluationError(
            f"No last fixing start time for {type(instrument).__name__}"
        ) from None
