from aggregate import reconcile, summarize_records, summarize_table
from csv_sink import CsvSink
from power_calc import PrimeRecord, make_record


def test_reconcile_dedups_and_sorts():
    records = [make_record(p) for p in (7, 2, 5, 2, 7)]
    assert [r.prime for r in reconcile(records)] == [2, 5, 7]


def test_summary_counts(tmp_path):
    path = tmp_path / "out.csv"
    sink = CsvSink(path)
    sink.write_batch([make_record(p) for p in (3, 11, 5)])
    sink.write_batch([make_record(p) for p in (5, 3)])
    summary = summarize_table(path)
    assert summary.rows == 5
    assert summary.distinct == 3
    assert summary.duplicates == 2
    assert summary.smallest == 3
    assert summary.largest == 11
    assert summary.mismatched == 0


def test_summary_flags_wrong_powers():
    summary = summarize_records([make_record(2), PrimeRecord(3, "9", "27", "80")])
    assert summary.mismatched == 1


def test_empty_summary(tmp_path):
    summary = summarize_table(tmp_path / "missing.csv")
    assert summary.rows == 0
    assert summary.smallest is None
    assert len(summary.lines()) == 6
