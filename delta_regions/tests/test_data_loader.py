import os
import tempfile
import unittest

import pytest

from delta_regions.data.data_loader import (GraphFormatError, build_weighted_graph, load_graph_pair,
                                            parse_edge_string, read_adjacency_records, read_edge_list,
                                            read_graph, vertex_count, write_adjacency_records)


class TestParsing(unittest.TestCase):

    def test_edge_string(self):
        self.assertEqual(parse_edge_string("1,2,5-2,3,4-"), [(1, 2, 5), (2, 3, 4)])
        self.assertEqual(parse_edge_string(",1,2,5-"), [(1, 2, 5)])
        self.assertEqual(parse_edge_string(""), [])

    def test_malformed_edge_string(self):
        with self.assertRaises(GraphFormatError):
            parse_edge_string("1,2-")
        with self.assertRaises(GraphFormatError):
            parse_edge_string("1,x,3-")

    def test_build_graph_is_symmetric(self):
        G = build_weighted_graph([(1, 2, 5), (2, 3, 4)])
        self.assertEqual(G[1][2]["weight"], 5)
        self.assertEqual(G[2][1]["weight"], 5)

    def test_float_tokens_must_be_integral(self):
        G = build_weighted_graph([("1", "2.0", "3.0")])
        self.assertEqual(G[1][2]["weight"], 3)
        with self.assertRaises(GraphFormatError):
            build_weighted_graph([(1, 2, 2.5)])

    def test_bad_triples(self):
        with self.assertRaises(GraphFormatError):
            build_weighted_graph([(1, 2)])
        with self.assertRaises(GraphFormatError):
            build_weighted_graph([(0, 2, 1)])

    def test_non_sequence_triple(self):
        with self.assertRaises(GraphFormatError) as ctx:
            build_weighted_graph([5])
        self.assertIn("#0", str(ctx.exception))

    def test_format_error_is_value_error(self):
        self.assertTrue(issubclass(GraphFormatError, ValueError))


class TestFiles(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.dir = self.tmp.name

    def tearDown(self):
        self.tmp.cleanup()

    def _write(self, name, text):
        path = os.path.join(self.dir, name)
        with open(path, "w") as f:
            f.write(text)
        return path

    def test_edge_list(self):
        path = self._write("g.txt", "# comment\n1,2,5\n\n2,3,5\n3,4,5\n")
        G = read_edge_list(path)
        self.assertEqual(G.number_of_edges(), 3)
        self.assertEqual(G[3][4]["weight"], 5)

    def test_edge_list_error_names_line(self):
        path = self._write("bad.txt", "1,2,5\n2,3\n")
        with self.assertRaises(GraphFormatError) as ctx:
            read_edge_list(path)
        self.assertIn(":2:", str(ctx.exception))

    def test_adjacency_records_round_trip(self):
        G = build_weighted_graph([(1, 2, 5), (2, 3, 4)])
        G.add_node(7)
        path = os.path.join(self.dir, "adj.txt")
        write_adjacency_records(G, path, distortion={1: 2.5})
        H = read_adjacency_records(path)
        self.assertEqual(set(H.nodes()), {1, 2, 3, 7})
        self.assertEqual(H[2][3]["weight"], 4)
        self.assertEqual(H.degree(7), 0)

    def test_adjacency_record_without_list(self):
        path = self._write("adj.txt", "1,0.0,2:5\n")
        with self.assertRaises(GraphFormatError):
            read_adjacency_records(path)

    def test_adjacency_records_reject_non_positive_ids(self):
        for text in ["0,0,[1:2]\n", "1,0,[-3:2]\n"]:
            path = self._write("adj.txt", text)
            with self.assertRaises(GraphFormatError) as ctx:
                read_adjacency_records(path)
            self.assertIn(":1", str(ctx.exception))

    def test_read_graph_dispatch(self):
        edges = self._write("edges.txt", "1,2,3\n")
        records = self._write("records.txt", "1,0,[2:3]\n2,0,[1:3]\n")
        self.assertEqual(read_graph(edges)[1][2]["weight"], 3)
        self.assertEqual(read_graph(records)[1][2]["weight"], 3)


def test_load_graph_pair(tmp_path):
    p1 = tmp_path / "g1.txt"
    p2 = tmp_path / "g2.txt"
    p1.write_text("1,2,5\n2,3,5\n3,4,5\n")
    p2.write_text("1,2,9\n2,3,5\n3,4,1\n")
    pair = load_graph_pair(p1, p2)
    assert pair.distortion == {1: 4, 2: 4, 3: 4, 4: 4}
    assert vertex_count(pair) == 4


def test_load_without_distortion(tmp_path):
    p = tmp_path / "g.txt"
    p.write_text("1,2,5\n")
    pair = load_graph_pair(p, p, compute=False)
    assert pair.distortion == {}


def test_missing_file(tmp_path):
    with pytest.raises(OSError):
        read_edge_list(tmp_path / "nope.txt")
