"""
Tasks Module
============

Task variants, the variant -> tag registry, request building and result
projection.
"""

from .models import TaskVariant, TaskStatus, TaskOptions, TaskSolution
from .registry import VARIANTS, VariantSpec, resolve, spec_for, variant_of
from .builder import build_create_request, build_result_request
from .poller import fetch_result, project, decode_balance

__all__ = [
    'TaskVariant',
    'TaskStatus',
    'TaskOptions',
    'TaskSolution',
    'VARIANTS',
    'VariantSpec',
    'resolve',
    'spec_for',
    'variant_of',
    'build_create_request',
    'build_result_request',
    'fetch_result',
    'project',
    'decode_balance',
]
