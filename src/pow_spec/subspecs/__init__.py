"""Proof-of-work consensus rules, one subpackage per concern."""

from .chain import ConsensusParameters, HeaderChain
from .compact import CompactTarget
from .pow import calculate_next_work_required, check_proof_of_work, get_next_work_required

__all__ = [
    "CompactTarget",
    "ConsensusParameters",
    "HeaderChain",
    "calculate_next_work_required",
    "check_proof_of_work",
    "get_next_work_required",
]
