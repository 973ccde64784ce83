# tests/core/migration/test_migration_mapping.py
"""
Testes das tabelas declarativas de migração.

Cobre a classificação de classes de conector (tabela exata e padrões),
as transformações de valor e os motivos dedicados de campos sem
equivalente.
"""

import pytest

try:
    from dataflow_manifest.core.catalog import ConnectorCategory
    from dataflow_manifest.core.migration.mapping import (
        DEFAULT_UNSUPPORTED_REASON,
        UnmappableValue,
        classify,
        converter_format,
        field_mappings_for,
        insert_mode_to_upsert,
        ms_to_duration,
        single_or_list,
        split_list,
        to_bool,
        to_int,
        unsupported_reason,
    )
except Exception as e:  # noqa: BLE001
    classify = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing migration mapping module. Implement:\n"
            "- src/dataflow_manifest/core/migration/mapping.py\n"
            f"Import error: {_IMPORT_ERR}"
        )


@pytest.mark.parametrize(
    "connector_class, category, target",
    [
        ("io.confluent.connect.jdbc.JdbcSinkConnector", "sink", "postgresql"),
        ("io.confluent.connect.jdbc.JdbcSourceConnector", "source", "postgresql"),
        ("io.debezium.connector.postgresql.PostgresConnector", "source", "postgresql"),
        ("org.apache.kafka.connect.mirror.MirrorSourceConnector", "source", "kafka"),
        ("com.acme.connect.CustomJdbcSinkConnector", "sink", "postgresql"),
        ("com.acme.PostgresSinkConnector", "sink", "postgresql"),
        ("com.acme.KafkaSourceConnector", "source", "kafka"),
    ],
)
def test_classify_known_classes(connector_class, category, target):
    _require_imports()
    rule = classify(connector_class)
    assert rule is not None
    assert rule.category is ConnectorCategory(category)
    assert rule.target_type == target


@pytest.mark.parametrize("connector_class", ["", "com.acme.S3SinkConnector", "io.confluent.connect.hdfs.HdfsSinkConnector"])
def test_classify_unknown_classes(connector_class):
    _require_imports()
    assert classify(connector_class) is None


def test_debezium_rule_carries_note():
    _require_imports()
    rule = classify("io.debezium.connector.postgresql.PostgresConnector")
    assert rule.note and "change data capture" in rule.note


def test_value_transforms():
    _require_imports()
    assert split_list("a:9092, b:9092,") == ["a:9092", "b:9092"]
    assert split_list(["x", " y "]) == ["x", "y"]
    assert single_or_list("orders") == "orders"
    assert single_or_list("orders,payments") == ["orders", "payments"]
    assert to_int(" 500 ") == 500
    assert to_bool("TRUE") is True
    assert ms_to_duration("5000") == "5s"
    assert ms_to_duration(1500) == "1500ms"
    assert insert_mode_to_upsert("upsert") is True
    assert insert_mode_to_upsert("INSERT") is False
    assert converter_format("io.confluent.connect.avro.AvroConverter") == "avro"


@pytest.mark.parametrize(
    "fn, value",
    [
        (split_list, " , "),
        (to_int, "ten"),
        (to_int, True),
        (to_bool, "yes"),
        (ms_to_duration, "-1"),
        (insert_mode_to_upsert, "update"),
        (converter_format, "org.apache.kafka.connect.storage.StringConverter"),
    ],
)
def test_value_transforms_reject(fn, value):
    _require_imports()
    with pytest.raises(UnmappableValue) as exc:
        fn(value)
    assert exc.value.reason


def test_unsupported_reasons():
    _require_imports()
    assert "classify" in unsupported_reason("connector.class")
    assert "parallelism" in unsupported_reason("TASKS.MAX")
    assert "single message transforms" in unsupported_reason("transforms.route.type")
    assert "error handling" in unsupported_reason("errors.tolerance")
    assert unsupported_reason("mode") == DEFAULT_UNSUPPORTED_REASON


def test_field_mappings_are_case_insensitive_index():
    _require_imports()
    index = field_mappings_for(ConnectorCategory.SINK, "postgresql")
    assert index["table.name.format"].target_field == "table"
    assert field_mappings_for(ConnectorCategory.UNKNOWN, "com.acme.X") == {}
