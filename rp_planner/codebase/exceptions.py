"""
Planner error taxonomy

InvalidInput means the caller has to fix its input; InternalInvariant means the
bounded search itself is broken and should be reported as a bug.
"""

class PlannerError(Exception):
    """Base class for all planner failures"""

class InvalidInput(PlannerError, ValueError):
    """Empty denomination set, non-positive amount/price or malformed settings"""

class InternalInvariant(PlannerError, RuntimeError):
    """No reachable amount at or above the target inside the search ceiling"""
