"""
Module: builder.layout

Purpose:
    Section distribution: placing selected questions into pattern sections.
"""

from .distributor import (
    BalancedDistributor,
    DistributedPaper,
    SectionAllocation,
    SectionDistributor,
    SequentialDistributor,
    distribute_paper,
    distribute_section_type,
)

__all__ = [
    "BalancedDistributor",
    "DistributedPaper",
    "SectionAllocation",
    "SectionDistributor",
    "SequentialDistributor",
    "distribute_paper",
    "distribute_section_type",
]
