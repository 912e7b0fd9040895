# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""Utils module for tolerances, node keys and helper functions."""

from .helpers import (
    NODE_KEY_DECIMALS,
    NODE_MATCH_EPS,
    node_key,
    NodeCollector,
    collect_nodes,
    print_progress
)

__all__ = [
    'NODE_KEY_DECIMALS',
    'NODE_MATCH_EPS',
    'node_key',
    'NodeCollector',
    'collect_nodes',
    'print_progress',
]
