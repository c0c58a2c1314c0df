from __future__ import annotations

import numpy as np
import pytest
from importantcuts._impl.contract import IndexMapping, contract, get_augmenting_paths_and_residual_graph_for_sets
from importantcuts._impl.graph import IndexedGraph
from importantcuts._impl.messages import CutInvariantMessage
from importantcuts._impl.mincut import IndexCut, min_cut_from_residual
from importantcuts.common import InvariantViolationError

from tests import utils

#   0 - 2
#   |   |
#   1 - 4
#   | /
#   3
GRAPH = IndexedGraph.from_edges([(0, 1), (0, 2), (1, 3), (1, 4), (2, 4), (3, 4)])

# Two sources, two destinations
SETS = IndexedGraph.from_edges([(0, 2), (1, 2), (1, 3), (2, 4), (3, 4), (4, 5), (3, 6), (0, 1), (5, 6)])


@pytest.fixture
def fx_mapping() -> IndexMapping:
    _, _, _, mapping = contract(GRAPH, {0, 1}, {3, 4})
    return mapping


class TestContract:
    def test_merge(self) -> None:
        contracted, source, destination, mapping = contract(GRAPH, {0, 1}, {3, 4})
        assert contracted.edges == ((0, 1), (0, 2), (1, 2))
        assert source == 0
        assert destination == 2
        assert mapping.vertices == ((0, 1), (2,), (3, 4))
        assert mapping.edges == ((1,), (2, 3), (4,))

    def test_keep_parallel(self) -> None:
        contracted, source, destination, mapping = contract(GRAPH, {0, 1}, {3, 4}, merge_parallel=False)
        assert contracted.edges == ((0, 1), (0, 2), (0, 2), (1, 2))
        assert (source, destination) == (0, 2)
        assert mapping.edges == ((1,), (2,), (3,), (4,))

    def test_isolated_terminal(self) -> None:
        graph = IndexedGraph.from_edges([(0, 1)], node_count=4)
        contracted, source, destination, mapping = contract(graph, {0}, {3})
        assert contracted.node_count == 4
        assert contracted.edges == ((0, 1),)
        assert (source, destination) == (0, 3)
        assert mapping.vertices == ((0,), (1,), (2,), (3,))

    def test_edges_in_use(self) -> None:
        graph = IndexedGraph.from_edges([(0, 1), (1, 2), (2, 3)])
        in_use = np.asarray([True, False, True])
        contracted, _, destination, mapping = contract(graph, {0}, {3}, in_use)
        assert contracted.edges == ((0, 1), (2, 3))
        assert destination == 3
        assert mapping.edges == ((0,), (2,))

    def test_every_vertex_mapped_once(self) -> None:
        contracted, _, _, mapping = contract(SETS, {0, 1}, {5, 6})
        assert len(mapping.vertices) == contracted.node_count
        assert sorted(v for vs in mapping.vertices for v in vs) == list(range(SETS.node_count))

    def test_ng(self) -> None:
        with pytest.raises(ValueError, match=r"Source set must be nonempty\."):
            contract(GRAPH, set(), {3})
        with pytest.raises(ValueError, match=r"Destination set must be nonempty\."):
            contract(GRAPH, {0}, set())
        with pytest.raises(ValueError, match=r"Source and destination sets must be disjoint\."):
            contract(GRAPH, {0, 1}, {1, 3})
        with pytest.raises(ValueError, match=r"Terminal index out of range\."):
            contract(GRAPH, {0}, {5})


class TestIndexMapping:
    def test_lookup(self, fx_mapping: IndexMapping) -> None:
        assert fx_mapping.original_vertices(2) == (3, 4)
        assert fx_mapping.original_edges(1) == (2, 3)

    def test_missing(self, fx_mapping: IndexMapping) -> None:
        with pytest.raises(InvariantViolationError) as excinfo:
            fx_mapping.original_vertices(3)
        assert excinfo.value.args[0] == CutInvariantMessage.MissingMapping("vertex", 3)

        with pytest.raises(InvariantViolationError) as excinfo:
            fx_mapping.original_edges(3)
        assert excinfo.value.args[0] == CutInvariantMessage.MissingMapping("edge", 3)

    def test_translate_cut(self, fx_mapping: IndexMapping) -> None:
        cut = IndexCut(frozenset({0, 1}), frozenset({2}), frozenset({1, 2}))
        translated = fx_mapping.translate_cut(cut)
        assert translated.source_set == {0, 1, 2}
        assert translated.destination_set == {3, 4}
        assert translated.cut_edge_set == {2, 3, 4}
        utils.assert_index_cut(GRAPH, translated, [False, True, True, True, True, False])

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            (CutInvariantMessage.IllegalEndpoint(1, 1), CutInvariantMessage.IllegalEndpoint(2, 2)),
            (CutInvariantMessage.NoCrossingEdge((0, 2)), CutInvariantMessage.NoCrossingEdge((0, 3))),
            (CutInvariantMessage.MissingResidualArc(2, 0, 1), CutInvariantMessage.MissingResidualArc(3, 0, 2)),
            (CutInvariantMessage.MissingMapping("edge", 7), CutInvariantMessage.MissingMapping("edge", 7)),
        ],
    )
    def test_translate_error(self, fx_mapping: IndexMapping, raw: object, expected: object) -> None:
        err = fx_mapping.translate_error(InvariantViolationError(raw))
        assert isinstance(err, InvariantViolationError)
        assert err.args[0] == expected


class TestForSets:
    def test_paths(self) -> None:
        ret = get_augmenting_paths_and_residual_graph_for_sets(SETS, {0, 1}, {5, 6}, 2)
        assert ret is not None
        contracted, destination, paths, residual, mapping = ret
        assert destination == 4
        assert {p.vertices for p in paths} == {(0, 2, 4), (0, 1, 3, 4)}
        assert {p.edges for p in paths} == {(1, 5), (0, 2, 4)}
        assert residual.number_of_nodes() == contracted.node_count == 5
        assert residual.number_of_edges() == 2 * contracted.edge_count - 5
        assert mapping.vertices == ((0, 1), (2,), (3,), (4,), (5, 6))
        assert mapping.edges == ((0, 1), (2,), (3,), (4,), (5,), (6,))

    def test_cut_in_original(self) -> None:
        ret = get_augmenting_paths_and_residual_graph_for_sets(SETS, {0, 1}, {5, 6}, 2)
        assert ret is not None
        _, destination, paths, residual, mapping = ret
        cut = mapping.translate_cut(min_cut_from_residual(residual, destination, paths))
        assert cut.source_set == {0, 1, 2, 3, 4}
        assert cut.destination_set == {5, 6}
        assert cut.cut_edge_set == {5, 6}
        utils.assert_index_cut(SETS, cut)

    def test_infeasible(self) -> None:
        assert get_augmenting_paths_and_residual_graph_for_sets(SETS, {0, 1}, {5, 6}, 1) is None

    def test_keep_parallel(self) -> None:
        # Edges 0 and 1 no longer merge, but 2 - 4 stays the only way out of vertex 2
        ret = get_augmenting_paths_and_residual_graph_for_sets(SETS, {0, 1}, {5, 6}, 2, merge_parallel=False)
        assert ret is not None
        contracted, _, paths, _, mapping = ret
        assert contracted.edge_count == 7
        assert all(len(es) == 1 for es in mapping.edges)
        assert len(paths) == 2
