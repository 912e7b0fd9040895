#!/usr/bin/env python3
"""
Skeleton extraction script.

This script computes the medial-axis skeleton of a built-in sample shape or of
user-supplied polygon coordinates and prints summary statistics for each
selected algorithm.
"""

import argparse
import logging
import sys
import os

# Add src to path if running from source
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import numpy as np
import polygon_skeleton as ps


def parse_points(text):
    """Parse 'x1,y1 x2,y2 ...' into an (N, 2) array."""
    try:
        pairs = [tuple(float(v) for v in token.split(',')) for token in text.split()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid coordinate list: {exc}")
    return ps.geometry.as_vertex_array(pairs)


def summarize(name, skeleton, show_spine):
    """Print node, edge and graph statistics for one skeleton."""
    x, y, w, h = skeleton.bounding_box()
    print(f"\n[{name}]")
    print(f"  Nodes:          {skeleton.node_count}")
    print(f"  Edges:          {skeleton.edge_count}")
    print(f"  Total length:   {skeleton.total_length():.4f}")
    print(f"  Junctions:      {len(skeleton.junction_nodes())}")
    print(f"  Leaves:         {len(skeleton.leaf_nodes())}")
    print(f"  Longest path:   {len(skeleton.longest_path())} nodes")
    print(f"  Bounding box:   ({x:.3f}, {y:.3f}) {w:.3f} x {h:.3f}")
    if show_spine:
        spine = skeleton.spine()
        print(f"  Spine:          {spine.edge_count} edges, length {spine.total_length():.4f}")
        for start, end in spine.edges:
            print(f"    ({start[0]:.4f}, {start[1]:.4f}) -> ({end[0]:.4f}, {end[1]:.4f})")


def main():
    """Main entry point for skeleton extraction."""
    parser = argparse.ArgumentParser(
        description='Medial-axis skeleton extraction for simple polygons'
    )
    parser.add_argument(
        '--shape',
        type=str,
        default='rectangle',
        choices=sorted(ps.geometry.SAMPLE_SHAPES),
        help='Built-in sample shape (default: rectangle)'
    )
    parser.add_argument(
        '--points',
        type=parse_points,
        default=None,
        help='Polygon as "x1,y1 x2,y2 ..." (overrides --shape)'
    )
    parser.add_argument(
        '--algo',
        type=str,
        default=ps.SkeletonAlgo.STRAIGHT_SKELETON.value,
        choices=[a.value for a in ps.SkeletonAlgo],
        help='Skeleton algorithm (default: straight)'
    )
    parser.add_argument(
        '--all',
        action='store_true',
        help='Run every algorithm'
    )
    parser.add_argument(
        '--spine',
        action='store_true',
        help='Also print the spine (leaf branches removed)'
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable debug logging'
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s'
    )

    if args.points is not None:
        polygon = args.points
        label = 'custom polygon'
    else:
        polygon = ps.geometry.SAMPLE_SHAPES[args.shape]()
        label = args.shape

    vertices = ps.geometry.as_vertex_array(polygon)
    print(f"Polygon: {label} ({len(vertices)} vertices, "
          f"perimeter {ps.geometry.polygon_perimeter(vertices):.4f}, "
          f"area {abs(ps.geometry.signed_area(vertices)):.4f})")

    shape = ps.geometry.as_shapely_polygon(vertices)
    algos = list(ps.SkeletonAlgo) if args.all else [ps.SkeletonAlgo(args.algo)]
    for i, algo in enumerate(algos):
        skeleton = ps.compute_skeleton(vertices, algo)
        summarize(algo.value, skeleton, args.spine)

        # Boundary points count as outside
        inside = ps.geometry.contains_points(shape, np.asarray(skeleton.nodes))
        print(f"  Interior nodes: {int(inside.sum())}/{len(inside)}")
        if len(algos) > 1:
            ps.utils.print_progress(i + 1, len(algos), "Algorithms run")

    print("\n✓ Skeleton extraction complete!")


if __name__ == '__main__':
    main()
