"""
tests/test_table.py

Tests for aggregation/table.py and the composite key in aggregation/models.py.
"""

from __future__ import annotations

import itertools

import pytest

from flowdigest.backend.aggregation.models import FlowRecord, make_flow_key
from flowdigest.backend.aggregation.table import AggregationTable
from flowdigest.backend.models import ParsedLine


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def parsed(
    firewall_ip="fw1",
    source_ip="src1",
    destination_ip="dst1",
    destination_port="80",
    protocol="tcp",
    packets_in=1,
    bytes_in=100,
    packets_out=1,
    bytes_out=50,
) -> ParsedLine:
    return ParsedLine(
        firewall_ip=firewall_ip,
        source_ip=source_ip,
        destination_ip=destination_ip,
        destination_port=destination_port,
        protocol=protocol,
        packets_in=packets_in,
        bytes_in=bytes_in,
        packets_out=packets_out,
        bytes_out=bytes_out,
    )


# ---------------------------------------------------------------------------
# make_flow_key
# ---------------------------------------------------------------------------

class TestMakeFlowKey:

    def test_joins_fields_in_order(self):
        assert make_flow_key("fw1", "src1", "dst1", "80", "tcp") == "fw1_src1_dst1_80_tcp"

    def test_deterministic(self):
        a = make_flow_key("10.0.0.1", "1.1.1.1", "2.2.2.2", "53", "17")
        b = make_flow_key("10.0.0.1", "1.1.1.1", "2.2.2.2", "53", "17")
        assert a == b

    def test_no_normalisation(self):
        assert make_flow_key("fw1", "src1", "dst1", "80", "TCP") != \
            make_flow_key("fw1", "src1", "dst1", "80", "tcp")

    def test_direction_matters(self):
        assert make_flow_key("fw1", "a", "b", "80", "tcp") != \
            make_flow_key("fw1", "b", "a", "80", "tcp")


# ---------------------------------------------------------------------------
# merge_or_insert
# ---------------------------------------------------------------------------

class TestMergeOrInsert:

    def test_insert_creates_record_with_count_one(self):
        table = AggregationTable()
        rec = table.merge_or_insert("k", "s", "d", 10, 1000, 5, 500)
        assert rec == FlowRecord(
            key="k", source_ip="s", destination_ip="d",
            packets_in=10, bytes_in=1000, packets_out=5, bytes_out=500, count=1,
        )
        assert len(table) == 1
        assert "k" in table

    def test_merge_sums_counters_and_increments_count(self):
        table = AggregationTable()
        table.merge_or_insert("k", "s", "d", 10, 1000, 5, 500)
        rec = table.merge_or_insert("k", "s", "d", 3, 300, 2, 200)
        assert (rec.packets_in, rec.bytes_in, rec.packets_out, rec.bytes_out) == (13, 1300, 7, 700)
        assert rec.count == 2
        assert len(table) == 1

    def test_first_writer_wins_for_ips(self):
        table = AggregationTable()
        table.merge_or_insert("k", "first-src", "first-dst", 1, 1, 1, 1)
        rec = table.merge_or_insert("k", "later-src", "later-dst", 1, 1, 1, 1)
        assert rec.source_ip == "first-src"
        assert rec.destination_ip == "first-dst"

    def test_returns_same_record_object(self):
        table = AggregationTable()
        a = table.merge_or_insert("k", "s", "d", 1, 1, 1, 1)
        b = table.merge_or_insert("k", "s", "d", 1, 1, 1, 1)
        assert a is b
        assert table.get("k") is a

    def test_large_values_do_not_wrap(self):
        table = AggregationTable()
        big = 2**64 - 1
        table.merge_or_insert("k", "s", "d", big, big, big, big)
        rec = table.merge_or_insert("k", "s", "d", 1, 1, 1, 1)
        assert rec.bytes_in == 2**64


# ---------------------------------------------------------------------------
# add(ParsedLine)
# ---------------------------------------------------------------------------

class TestAddParsedLine:

    def test_merge_correctness_over_many_lines(self):
        table = AggregationTable()
        values = [(i, i * 10, i + 1, (i + 1) * 10) for i in range(25)]
        for pi, bi, po, bo in values:
            table.add(parsed(packets_in=pi, bytes_in=bi, packets_out=po, bytes_out=bo))

        rec = table.get("fw1_src1_dst1_80_tcp")
        assert rec.packets_in == sum(v[0] for v in values)
        assert rec.bytes_in == sum(v[1] for v in values)
        assert rec.packets_out == sum(v[2] for v in values)
        assert rec.bytes_out == sum(v[3] for v in values)
        assert rec.count == len(values)

    @pytest.mark.parametrize("field,value", [
        ("firewall_ip", "fw2"),
        ("source_ip", "src2"),
        ("destination_ip", "dst2"),
        ("destination_port", "443"),
        ("protocol", "udp"),
    ])
    def test_any_key_field_difference_splits_flows(self, field, value):
        table = AggregationTable()
        table.add(parsed())
        table.add(parsed(**{field: value}))
        assert len(table) == 2
        assert all(rec.count == 1 for rec in table)

    def test_non_key_fields_do_not_split_flows(self):
        table = AggregationTable()
        table.add(parsed(packets_in=1, bytes_in=2))
        table.add(parsed(packets_in=99, bytes_in=98))
        assert len(table) == 1

    def test_order_independence(self):
        lines = [
            parsed(packets_in=1, bytes_in=10),
            parsed(source_ip="src2", packets_in=2, bytes_in=20),
            parsed(packets_in=3, bytes_in=30),
            parsed(protocol="udp", packets_in=4, bytes_in=40),
            parsed(source_ip="src2", packets_in=5, bytes_in=50),
        ]

        def summary(order):
            table = AggregationTable()
            for line in order:
                table.add(line)
            return {
                k: (r.packets_in, r.bytes_in, r.packets_out, r.bytes_out, r.count)
                for k, r in table.records().items()
            }

        expected = summary(lines)
        for order in itertools.permutations(lines):
            assert summary(order) == expected

    def test_records_is_a_copy(self):
        table = AggregationTable()
        table.add(parsed())
        snapshot = table.records()
        snapshot.clear()
        assert len(table) == 1
