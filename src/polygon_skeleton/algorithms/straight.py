# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2025  Rami Ardati

"""
Straight skeleton by iterative wavefront shrinking.

The polygon boundary is held as circular chains of vertices stored in a flat
arena and linked by integer ``prev``/``next`` indices. Each pass moves every
chain inward to its next edge or split event, emits skeleton edges for the
vertices that collided, and splits chains where the wavefront pinched off.
"""

import logging
import math
from typing import Iterator, List

from ..geometry.primitives import PolygonLike, as_vertex_array, ensure_clockwise, signed_area
from ..topology.skeleton import Skeleton
from ..utils.helpers import NodeCollector

logger = logging.getLogger(__name__)

HIGH_EPS = 1e-12   # parallel/zero-length tests
MED_EPS = 1e-5     # split-event projection slack, minimum emitted edge
LOW_EPS = 1e-3     # collision radius for incident vertices
PASS_FACTOR = 4    # pass ceiling = PASS_FACTOR * vertex count
MAX_CHAIN_LENGTH = 10000

TWO_PI = 2.0 * math.pi


class _ChainVertex:
    __slots__ = ('index', 'x', 'y', 'dir_x', 'dir_y', 'length', 'bis_x', 'bis_y',
                 'velocity', 'is_reflex', 'prev', 'next', 'orig_x', 'orig_y', 'pass_no')

    def __init__(self, index: int, x: float, y: float, prev: int = -1, nxt: int = -1,
                 pass_no: int = 0):
        self.index = index
        self.x = x
        self.y = y
        self.dir_x = 0.0
        self.dir_y = 0.0
        self.length = 0.0
        self.bis_x = 0.0
        self.bis_y = 0.0
        self.velocity = 0.0
        self.is_reflex = False
        self.prev = prev
        self.next = nxt
        self.orig_x = x
        self.orig_y = y
        self.pass_no = pass_no

    def recalc_segment(self, next_x: float, next_y: float) -> None:
        """Unit direction and length of the segment to the next vertex."""
        dx = next_x - self.x
        dy = next_y - self.y
        length = math.hypot(dx, dy)
        if length <= HIGH_EPS:
            self.dir_x = self.dir_y = self.length = 0.0
        else:
            self.dir_x = dx / length
            self.dir_y = dy / length
            self.length = length

    def recalc_bisector(self, prev_dir_x: float, prev_dir_y: float) -> None:
        """
        Interior bisector and shrink velocity from the incoming segment direction.

        The outgoing direction is rotated clockwise by half the interior angle;
        velocity is the sine of that half angle.
        """
        ax, ay = self.dir_x, self.dir_y
        bx, by = -prev_dir_x, -prev_dir_y
        cross = bx * ay - by * ax
        dot = bx * ax + by * ay
        angle = (math.atan2(cross, dot) + TWO_PI) % TWO_PI
        half = angle / 2.0

        sin_a = math.sin(-half)
        cos_a = math.cos(-half)
        self.bis_x = ax * cos_a - ay * sin_a
        self.bis_y = ax * sin_a + ay * cos_a
        self.velocity = math.sin(half)
        self.is_reflex = angle > math.pi


def _trace_plane(plane_x: float, plane_y: float, normal_x: float, normal_y: float,
                 origin_x: float, origin_y: float, dir_x: float, dir_y: float) -> float:
    """
    Distance along a ray to a line given by point and normal, or -1 when missed.

    The ray origin must lie on the normal's side of the line.
    """
    side = (origin_x - plane_x) * normal_x + (origin_y - plane_y) * normal_y
    if side < 0.0:
        return -1.0
    denom = dir_x * normal_x + dir_y * normal_y
    if abs(denom) < HIGH_EPS:
        return -1.0
    return ((plane_x - origin_x) * normal_x + (plane_y - origin_y) * normal_y) / denom


def _angle_between(ax: float, ay: float, bx: float, by: float) -> float:
    norm = math.sqrt((ax * ax + ay * ay) * (bx * bx + by * by))
    if norm < 1e-15:
        return 0.0
    cosine = max(-1.0, min(1.0, (ax * bx + ay * by) / norm))
    return math.acos(cosine)


class Wavefront:
    """
    Shrinking wavefront of one polygon and the skeleton edges it has traced.
    """

    def __init__(self, vertices):
        """
        Build one circular chain from clockwise polygon vertices.

        :param vertices: (N, 2) clockwise vertex array, N >= 3.
        :type vertices: np.ndarray
        """
        n = len(vertices)
        self.vertex_count = n
        self.verts: List[_ChainVertex] = [
            _ChainVertex(i, float(x), float(y), (i - 1 + n) % n, (i + 1) % n)
            for i, (x, y) in enumerate(vertices)
        ]
        self.collector = NodeCollector()
        self.passes = 0

        for vert in self.verts:
            nxt = self.verts[vert.next]
            vert.recalc_segment(nxt.x, nxt.y)
        for vert in self.verts:
            self.verts[vert.next].recalc_bisector(vert.dir_x, vert.dir_y)

    def ring(self, start: int) -> Iterator[int]:
        """Vertex indices of the chain containing ``start``, beginning there."""
        idx = start
        for _ in range(MAX_CHAIN_LENGTH):
            yield idx
            idx = self.verts[idx].next
            if idx == start:
                return

    def chain_length(self, chain: int) -> int:
        return sum(1 for _ in self.ring(chain))

    def _new_vertex(self, x: float, y: float, pass_no: int) -> int:
        idx = len(self.verts)
        self.verts.append(_ChainVertex(idx, x, y, pass_no=pass_no))
        return idx

    def _emit(self, ax: float, ay: float, bx: float, by: float) -> None:
        if abs(bx - ax) < MED_EPS and abs(by - ay) < MED_EPS:
            return
        self.collector.add_edge((ax, ay), (bx, by))

    def run(self) -> None:
        """
        Shrink until every chain has collapsed or the pass ceiling is reached.
        """
        active = [0]
        ceiling = self.vertex_count * PASS_FACTOR
        pass_no = 0
        while active:
            if pass_no > ceiling:
                logger.warning("Straight skeleton stopped at the pass ceiling (%d) "
                               "with %d chains still active", ceiling, len(active))
                break
            pass_no += 1

            split_chains: List[int] = []
            for chain in active:
                dist = self.find_shortest_distance(chain)
                if math.isinf(dist) or math.isnan(dist):
                    continue
                dist = max(dist, 0.0)
                if dist > 0.0:
                    self.apply_shrink(chain, dist)
                self.process_intersections(chain, pass_no, split_chains)
            active = split_chains
        self.passes = pass_no

    def find_shortest_distance(self, chain: int) -> float:
        """
        Smallest shrink distance to the next edge or split event of a chain.

        :param chain: Any vertex index of the chain.
        :type chain: int
        :return: Distance, or infinity when no event exists.
        :rtype: float
        """
        verts = self.verts
        distance = math.inf
        for vert_idx in self.ring(chain):
            vert = verts[vert_idx]
            nxt = verts[vert.next]

            # Edge event: adjacent bisectors meet
            n0x, n0y = -vert.bis_y, vert.bis_x
            n1x, n1y = nxt.bis_y, -nxt.bis_x
            dx = nxt.x - vert.x
            dy = nxt.y - vert.y
            denom0 = vert.bis_x * n1x + vert.bis_y * n1y
            denom1 = nxt.bis_x * n0x + nxt.bis_y * n0y
            if abs(denom0) >= HIGH_EPS and abs(denom1) >= HIGH_EPS:
                entry0 = (dx * n1x + dy * n1y) / denom0
                entry1 = (-dx * n0x - dy * n0y) / denom1
                entry = min(entry0 * vert.velocity, entry1 * nxt.velocity)
                if not math.isinf(entry) and 0.0 <= entry < distance:
                    distance = entry

            # Split event: reflex vertex runs into a non-adjacent segment
            if vert.is_reflex and vert.velocity > 0.0:
                for seg_idx in self.ring(vert_idx):
                    seg_beg = verts[seg_idx]
                    if seg_idx == vert_idx or seg_beg.next == vert_idx:
                        continue
                    entry = self._split_distance(vert, seg_beg, verts[seg_beg.next])
                    if 0.0 <= entry < distance:
                        distance = entry
        return distance

    def _split_distance(self, vert: _ChainVertex, seg_beg: _ChainVertex,
                        seg_end: _ChainVertex) -> float:
        if seg_beg.velocity == 0.0 or seg_end.velocity == 0.0:
            return -1.0
        entry = _trace_plane(seg_beg.x, seg_beg.y, seg_beg.dir_y, -seg_beg.dir_x,
                             vert.x, vert.y, vert.bis_x, vert.bis_y)
        if entry < 0.0:
            return -1.0
        angle = _angle_between(vert.bis_x, vert.bis_y, seg_beg.dir_x, seg_beg.dir_y)
        if angle <= 0.0:
            return -1.0
        entry /= (1.0 / math.sin(angle) + 1.0 / vert.velocity)
        if math.isinf(entry) or entry < 0.0:
            return -1.0

        # The hit must land on the segment as it will have grown by then
        s0x = seg_beg.x + seg_beg.bis_x * (entry / seg_beg.velocity)
        s0y = seg_beg.y + seg_beg.bis_y * (entry / seg_beg.velocity)
        s1x = seg_end.x + seg_end.bis_x * (entry / seg_end.velocity)
        s1y = seg_end.y + seg_end.bis_y * (entry / seg_end.velocity)
        length = (s1x - s0x) * seg_beg.dir_x + (s1y - s0y) * seg_beg.dir_y
        if not length > 0.0:
            return -1.0
        px = vert.x + vert.bis_x * (entry / vert.velocity)
        py = vert.y + vert.bis_y * (entry / vert.velocity)
        project = (px - s0x) * seg_beg.dir_x + (py - s0y) * seg_beg.dir_y
        if -MED_EPS <= project <= length + MED_EPS:
            return entry
        return -1.0

    def apply_shrink(self, chain: int, distance: float) -> None:
        """Move every vertex of a chain along its bisector, then refresh the chain."""
        verts = self.verts
        for idx in self.ring(chain):
            vert = verts[idx]
            if vert.velocity > HIGH_EPS:
                scale = distance / vert.velocity
                vert.x += vert.bis_x * scale
                vert.y += vert.bis_y * scale
        for idx in self.ring(chain):
            vert = verts[idx]
            nxt = verts[vert.next]
            vert.recalc_segment(nxt.x, nxt.y)
        for idx in self.ring(chain):
            vert = verts[idx]
            verts[vert.next].recalc_bisector(vert.dir_x, vert.dir_y)

    def recalc_surrounding(self, idx: int) -> None:
        verts = self.verts
        vert = verts[idx]
        prev = verts[vert.prev]
        nxt = verts[vert.next]
        prev.recalc_segment(vert.x, vert.y)
        vert.recalc_segment(nxt.x, nxt.y)
        prev_prev = verts[prev.prev]
        prev.recalc_bisector(prev_prev.dir_x, prev_prev.dir_y)
        vert.recalc_bisector(prev.dir_x, prev.dir_y)
        nxt.recalc_bisector(vert.dir_x, vert.dir_y)

    def process_intersections(self, chain: int, pass_no: int, split_chains: List[int]) -> None:
        """
        Resolve the events reached by the last shrink.

        Vertices touching a non-adjacent segment split it; coincident vertices
        emit edges to their meeting point and divide the chain into sub-chains;
        chains that collapsed to one or two vertices are closed off.

        :param chain: Any vertex index of the chain.
        :type chain: int
        :param pass_no: Current pass marker.
        :type pass_no: int
        :param split_chains: Receives the chains that stay active.
        :type split_chains: List[int]
        """
        self._snap_to_segments(chain, pass_no)
        resolved = self._resolve_incident(chain, pass_no)

        verts = self.verts
        for start in resolved:
            count = self.chain_length(start)
            if count > 2:
                split_chains.append(start)
            elif count == 2:
                a = verts[start]
                b = verts[a.next]
                mid_x = (a.x + b.x) / 2.0
                mid_y = (a.y + b.y) / 2.0
                self._emit(a.orig_x, a.orig_y, mid_x, mid_y)
                self._emit(b.orig_x, b.orig_y, mid_x, mid_y)
            elif count == 1:
                a = verts[start]
                self._emit(a.orig_x, a.orig_y, a.x, a.y)

    def _snap_to_segments(self, chain: int, pass_no: int) -> None:
        verts = self.verts
        acc_sq = LOW_EPS * LOW_EPS
        for vert_idx in self.ring(chain):
            vert = verts[vert_idx]
            if vert.pass_no == pass_no:
                continue

            best_dist_sq = math.inf
            best_seg = -1
            best_x = best_y = 0.0
            for seg_idx in self.ring(vert_idx):
                seg = verts[seg_idx]
                if seg_idx == vert_idx or seg.next == vert_idx:
                    continue
                seg_end = verts[seg.next]
                if (vert.x - seg.x) ** 2 + (vert.y - seg.y) ** 2 <= acc_sq:
                    continue
                if (vert.x - seg_end.x) ** 2 + (vert.y - seg_end.y) ** 2 <= acc_sq:
                    continue
                if seg.length <= 0.0:
                    continue

                rel_x = vert.x - seg.x
                rel_y = vert.y - seg.y
                project = rel_x * seg.dir_x + rel_y * seg.dir_y
                if not 0.0 <= project <= seg.length:
                    continue
                if abs(rel_x * seg.dir_y - rel_y * seg.dir_x) > LOW_EPS:
                    continue
                px = seg.x + seg.dir_x * project
                py = seg.y + seg.dir_y * project
                dist_sq = (vert.x - px) ** 2 + (vert.y - py) ** 2
                if dist_sq < best_dist_sq:
                    best_dist_sq = dist_sq
                    best_seg = seg_idx
                    best_x, best_y = px, py

            if best_seg >= 0:
                vert.x, vert.y = best_x, best_y
                new_idx = self._new_vertex(best_x, best_y, pass_no)
                seg_beg = verts[best_seg]
                seg_end_idx = seg_beg.next
                verts[new_idx].prev = best_seg
                verts[new_idx].next = seg_end_idx
                seg_beg.next = new_idx
                verts[seg_end_idx].prev = new_idx
                self.recalc_surrounding(new_idx)

    def _resolve_incident(self, chain: int, pass_no: int) -> List[int]:
        verts = self.verts
        threshold_sq = (2.0 * LOW_EPS) ** 2
        unresolved = [chain]
        resolved = []
        while unresolved:
            start = unresolved.pop()
            for vert_idx in self.ring(start):
                vert = verts[vert_idx]
                if vert.pass_no == pass_no:
                    continue
                vert.pass_no = pass_no

                incident = []
                for other_idx in self.ring(vert_idx):
                    if other_idx == vert_idx:
                        continue
                    other = verts[other_idx]
                    if (vert.x - other.x) ** 2 + (vert.y - other.y) ** 2 < threshold_sq:
                        other.pass_no = pass_no
                        incident.append(other_idx)
                if not incident:
                    continue
                incident.append(vert_idx)

                for inc_idx in incident:
                    inc = verts[inc_idx]
                    self._emit(inc.orig_x, inc.orig_y, vert.x, vert.y)

                count = len(incident)
                for i in range(count):
                    prev_inc = verts[incident[i]]
                    next_inc = verts[incident[(i + 1) % count]]
                    if prev_inc.next == next_inc.index:
                        continue
                    # Non-incident vertices in between become their own chain
                    new_idx = self._new_vertex(vert.x, vert.y, pass_no)
                    before_next = next_inc.prev
                    after_prev = prev_inc.next
                    verts[new_idx].prev = before_next
                    verts[new_idx].next = after_prev
                    verts[before_next].next = new_idx
                    verts[after_prev].prev = new_idx
                    self.recalc_surrounding(new_idx)
                    unresolved.append(new_idx)
                break
            else:
                resolved.append(start)
        return resolved


def straight_skeleton(polygon: PolygonLike) -> Skeleton:
    """
    Straight skeleton of a simple polygon.

    :param polygon: Polygon input in either winding.
    :type polygon: PolygonLike
    :return: Skeleton whose leaves are the polygon vertices.
    :rtype: Skeleton
    """
    vertices = as_vertex_array(polygon)
    if len(vertices) < 3:
        return Skeleton.empty()
    # zero-area outline has no interior to shrink into
    if abs(signed_area(vertices)) <= HIGH_EPS:
        return Skeleton.empty()

    wavefront = Wavefront(ensure_clockwise(vertices))
    wavefront.run()
    collector = wavefront.collector
    logger.debug("Straight skeleton: %d nodes, %d edges in %d passes",
                 len(collector), len(collector.edges), wavefront.passes)
    return Skeleton(collector.nodes, collector.edges)
