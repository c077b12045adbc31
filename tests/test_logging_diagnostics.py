import logging

import pytest

from vptreex import build_tree, knn
from vptreex import config as vx_config
from vptreex.core.metrics import euclidean
from vptreex.diagnostics import log_operation
from vptreex.logging import get_logger


def _points():
    return [(0.0, 0.0), (1.0, 1.0), (2.0, 2.0), (3.0, 1.0)]


def test_build_emits_resource_log(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO, logger="vptreex.algo.build")

    build_tree(_points(), euclidean, seed=0)

    records = [record for record in caplog.records if "op=build_tree" in record.message]
    assert records, "expected build_tree operation log"
    message = records[-1].message
    assert "wall_ms=" in message
    assert "cpu_user_ms=" in message
    assert "rss_delta=" in message
    assert "items=4" in message
    assert "metric=euclidean" in message


def test_knn_emits_resource_log(caplog: pytest.LogCaptureFixture) -> None:
    tree = build_tree(_points(), euclidean, seed=0)
    caplog.set_level(logging.INFO, logger="vptreex.queries.knn")

    neighbours = knn(tree, [(0.1, 0.1), (2.7, 2.8)], k=2)

    assert [len(row) for row in neighbours] == [2, 2]
    records = [record for record in caplog.records if "op=knn_query" in record.message]
    assert records, "expected knn operation log"
    message = records[-1].message
    assert "queries=2" in message
    assert "k=2" in message
    assert "visited=" in message


def test_diagnostics_can_be_disabled(
    caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("VPTREEX_ENABLE_DIAGNOSTICS", "0")
    vx_config.reset_runtime_config_cache()

    tree = build_tree(_points(), euclidean, seed=0)
    caplog.set_level(logging.INFO, logger="vptreex.queries.knn")

    knn(tree, [(0.1, 0.1)], k=1)

    records = [record for record in caplog.records if "op=knn_query" in record.message]
    assert records
    message = records[-1].message
    assert "cpu_user_ms=NA" in message
    assert "rss_delta=NA" in message


def test_log_operation_reports_even_when_block_raises(
    caplog: pytest.LogCaptureFixture,
) -> None:
    logger = get_logger("tests.diagnostics")
    caplog.set_level(logging.INFO, logger=logger.name)

    with pytest.raises(RuntimeError):
        with log_operation(logger, "explode") as op_log:
            op_log.add_metadata(stage="partition")
            raise RuntimeError("boom")

    messages = [record.message for record in caplog.records]
    assert any("op=explode" in msg and "stage=partition" in msg for msg in messages)


def test_get_logger_namespaces_names():
    assert get_logger("queries.knn").name == "vptreex.queries.knn"
    assert get_logger("vptreex.algo").name == "vptreex.algo"
    assert get_logger().name == "vptreex"
