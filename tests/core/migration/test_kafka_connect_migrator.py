# tests/core/migration/test_kafka_connect_migrator.py
"""
Testes do KafkaConnectMigrator.

Este módulo valida a migração de um ou dois conectores Kafka Connect
para um manifest DataFlow.

Os testes asseguram que:
- um único conector ocupa o lado da sua categoria e o outro vira placeholder
- dois conectores na mesma categoria falham com AmbiguousConnectorRoles
- classes desconhecidas seguem adiante com warning
- cada campo legado aparece em exatamente uma das contabilidades
  (`migrated_fields` ou `unsupported_fields`)
- quantidades e formatos de entrada inválidos falham com InvalidInput

Decisões arquiteturais:
    - O migrador nunca infere transformações
    - Chaves de config são comparadas sem diferenciar maiúsculas

Limites explícitos:
    - Não valida o texto YAML (ver testes de operações)
"""

import json

import pytest

try:
    from dataflow_manifest.core.config import Settings
    from dataflow_manifest.core.exceptions import AmbiguousConnectorRoles, InvalidInput
    from dataflow_manifest.core.migration import (
        KafkaConnectMigrator,
        parse_connectors,
        sanitize_name,
    )
except Exception as e:  # noqa: BLE001
    KafkaConnectMigrator = None
    _IMPORT_ERR = e
else:
    _IMPORT_ERR = None


def _require_imports():
    """
    Garante que o migrador e suas exceções tipadas estejam disponíveis.

    Falha imediatamente com mensagem orientada em vez de erros indiretos
    de `NoneType` nos testes.
    """
    if _IMPORT_ERR is not None:
        pytest.fail(
            "Missing migration modules. Implement:\n"
            "- src/dataflow_manifest/core/migration/kafka_connect.py (KafkaConnectMigrator)\n"
            "- src/dataflow_manifest/core/migration/types.py\n"
            f"Import error: {_IMPORT_ERR}"
        )


def _migrate(connectors, **kwargs):
    return KafkaConnectMigrator(settings=Settings(**kwargs)).migrate(connectors)


def _migrated(result):
    return [(f.source_field, f.target_field) for f in result.migrated_fields]


def _unsupported(result):
    return {f.field: f.reason for f in result.unsupported_fields}


def test_single_jdbc_sink(jdbc_sink_connector):
    """
    Caso canônico: JDBC sink sozinho.

    - spec.sink.type resolve para postgresql
    - connection.url e table.name.format são migrados
    - topics e connector.class ficam em unsupported com motivo dedicado
    - o lado source vira placeholder `unspecified` com warning
    """
    _require_imports()
    result = _migrate([jdbc_sink_connector])
    m = result.manifest

    assert m.name == "pg-events-sink"
    assert m.sink.type == "postgresql"
    assert m.sink.config == {"connectionString": "jdbc:postgresql://pg:5432/mydb", "table": "events"}
    assert m.source.type == "unspecified"
    assert m.source.config == {}
    assert m.transformations == []

    assert _migrated(result) == [
        ("connection.url", "connectionString"),
        ("table.name.format", "table"),
    ]
    unsupported = _unsupported(result)
    assert set(unsupported) == {"connector.class", "topics"}
    assert "DataFlow source" in unsupported["topics"]

    assert len(result.warnings) == 1
    assert "spec.source.type is 'unspecified'" in result.warnings[0]


def test_single_kafka_source_splits_brokers(kafka_source_connector):
    _require_imports()
    result = _migrate([kafka_source_connector])
    m = result.manifest

    assert m.name == "orders-mirror"
    assert m.source.type == "kafka"
    assert m.source.config == {
        "brokers": ["kafka-1:9092", "kafka-2:9092"],
        "topic": "orders",
        "consumerGroup": "orders-mirror",
    }
    assert m.sink.type == "unspecified"
    assert "tasks.max" in _unsupported(result)
    assert any("spec.sink.type" in w for w in result.warnings)


def test_two_connectors_source_and_sink(jdbc_source_connector):
    """
    Um source JDBC e um sink Kafka montam o pipeline completo; o nome vem
    do primeiro conector e os registros seguem a ordem de entrada.
    """
    _require_imports()
    kafka_sink = {
        "name": "orders-out",
        "config": {
            "connector.class": "com.acme.connect.KafkaSinkConnector",
            "bootstrap.servers": "k:9092",
            "topic": "users-changes",
        },
    }
    result = _migrate([kafka_sink, jdbc_source_connector])
    m = result.manifest

    assert m.name == "orders-out"
    assert m.source.type == "postgresql"
    assert m.source.config == {
        "connectionString": "jdbc:postgresql://pg:5432/app",
        "table": "users",
        "pollInterval": "5s",
    }
    assert m.sink.type == "kafka"
    assert m.sink.config == {"brokers": ["k:9092"], "topic": "users-changes"}
    assert [f.connector for f in result.migrated_fields] == ["orders-out"] * 2 + ["users-source"] * 3
    assert result.warnings == []


def test_two_sinks_are_ambiguous(jdbc_sink_connector):
    _require_imports()
    other = {"name": "pg2", "config": dict(jdbc_sink_connector["config"])}
    with pytest.raises(AmbiguousConnectorRoles) as exc:
        _migrate([jdbc_sink_connector, other])
    assert exc.value.details["category"] == "sink"
    assert exc.value.details["connectors"] == ["pg-events-sink", "pg2"]


def test_two_unknown_are_ambiguous():
    _require_imports()
    a = {"name": "a", "config": {"connector.class": "com.acme.S3SinkConnector"}}
    b = {"name": "b", "config": {"connector.class": "com.acme.GcsSinkConnector"}}
    with pytest.raises(AmbiguousConnectorRoles):
        _migrate([a, b])


def test_unknown_class_proceeds_with_warning():
    """
    Classe não reconhecida: o próprio nome da classe vira o tipo do lado
    source, todos os campos ficam em unsupported e a migração completa.
    """
    _require_imports()
    connector = {
        "name": "s3",
        "config": {"connector.class": "com.acme.S3SinkConnector", "s3.bucket.name": "raw"},
    }
    result = _migrate([connector])

    assert result.manifest.source.type == "com.acme.S3SinkConnector"
    assert result.manifest.sink.type == "unspecified"
    assert result.warnings[0] == "unrecognized connector class: com.acme.S3SinkConnector"
    assert result.migrated_fields == []
    assert _unsupported(result)["s3.bucket.name"] == "no DataFlow equivalent for connector.class-specific option"


def test_unknown_next_to_known_sink_takes_source(jdbc_sink_connector):
    _require_imports()
    unknown = {"name": "legacy", "config": {"connector.class": "com.acme.FtpConnector"}}
    result = _migrate([jdbc_sink_connector, unknown])
    assert result.manifest.source.type == "com.acme.FtpConnector"
    assert result.manifest.sink.type == "postgresql"


def test_missing_connector_class():
    _require_imports()
    result = _migrate([{"name": "", "config": {"foo": "bar"}}])
    assert result.warnings[0] == "unrecognized connector class: <missing>"
    assert result.manifest.source.type == "unknown"
    assert result.manifest.name == "dataflow-from-connect"


def test_debezium_note_and_required_field_warnings():
    _require_imports()
    connector = {
        "name": "cdc",
        "config": {
            "connector.class": "io.debezium.connector.postgresql.PostgresConnector",
            "database.hostname": "pg",
        },
    }
    result = _migrate([connector])

    assert result.manifest.source.type == "postgresql"
    assert result.warnings[0].startswith("cdc: change data capture is not preserved")
    assert "source postgresql: required field 'connectionString' not set" in result.warnings
    assert "source postgresql: required field 'table' not set" in result.warnings


def test_keys_are_case_insensitive():
    _require_imports()
    connector = {
        "name": "pg",
        "config": {
            "Connector.Class": "io.confluent.connect.jdbc.JdbcSinkConnector",
            "Connection.URL": "jdbc:postgresql://pg/db",
            "TABLE.NAME.FORMAT": "t",
        },
    }
    result = _migrate([connector])
    assert result.manifest.sink.type == "postgresql"
    assert _migrated(result) == [("Connection.URL", "connectionString"), ("TABLE.NAME.FORMAT", "table")]


def test_duplicate_target_and_unmappable_value():
    _require_imports()
    connector = {
        "name": "k",
        "config": {
            "connector.class": "com.acme.KafkaSourceConnector",
            "bootstrap.servers": "k:9092",
            "topics": "a",
            "topic": "b",
            "value.converter": "org.apache.kafka.connect.storage.StringConverter",
        },
    }
    result = _migrate([connector])
    unsupported = _unsupported(result)

    assert result.manifest.source.config["topic"] == "a"
    assert unsupported["topic"].startswith("duplicate of topics")
    assert "StringConverter" in unsupported["value.converter"]
    assert "format" not in result.manifest.source.config


def test_null_value_is_unsupported_not_stringified(kafka_source_connector):
    """
    Valor `null` (JSON) não vira a string "None": o campo fica em
    unsupported e o campo obrigatório correspondente gera warning.
    """
    _require_imports()
    connector = {
        "name": kafka_source_connector["name"],
        "config": dict(kafka_source_connector["config"], **{"bootstrap.servers": None}),
    }
    result = _migrate(json.loads(json.dumps([connector])))

    assert "brokers" not in result.manifest.source.config
    assert _unsupported(result)["bootstrap.servers"] == "empty value"
    assert "bootstrap.servers" not in [f.source_field for f in result.migrated_fields]
    assert "source kafka: required field 'brokers' not set" in result.warnings


def test_every_field_is_accounted_once(jdbc_sink_connector):
    _require_imports()
    result = _migrate([jdbc_sink_connector])
    seen = [f.source_field for f in result.migrated_fields] + [f.field for f in result.unsupported_fields]
    assert sorted(seen) == sorted(jdbc_sink_connector["config"])


def test_settings_drive_placeholder_and_fallback():
    _require_imports()
    result = _migrate(
        [{"config": {"connector.class": "io.confluent.connect.jdbc.JdbcSinkConnector"}}],
        placeholder_type="todo",
        fallback_name="migrated",
    )
    assert result.manifest.source.type == "todo"
    assert result.manifest.name == "migrated"


@pytest.mark.parametrize("count", [0, 3])
def test_wrong_connector_count(jdbc_sink_connector, count):
    _require_imports()
    with pytest.raises(InvalidInput) as exc:
        _migrate([jdbc_sink_connector] * count)
    assert exc.value.details["count"] == count


def test_json_text_input(jdbc_sink_connector):
    _require_imports()
    single = _migrate(json.dumps(jdbc_sink_connector))
    as_list = _migrate(json.dumps([jdbc_sink_connector]))
    assert single.manifest == as_list.manifest


@pytest.mark.parametrize(
    "value",
    [
        "{not json",
        42,
        ["not-an-object"],
        [{"name": "x"}],
        [{"name": "x", "config": "connector.class=Foo"}],
    ],
)
def test_malformed_input_is_invalid_input(value):
    _require_imports()
    with pytest.raises(InvalidInput):
        parse_connectors(value)


def test_to_dict_uses_camel_case_keys(jdbc_sink_connector):
    _require_imports()
    out = _migrate([jdbc_sink_connector]).to_dict()
    assert set(out) == {"manifest", "migratedFields", "unsupportedFields", "warnings"}
    assert out["migratedFields"][0] == {
        "connector": "pg-events-sink",
        "sourceField": "connection.url",
        "targetField": "connectionString",
    }


@pytest.mark.parametrize(
    "raw, expected",
    [("Orders Mirror", "orders-mirror"), ("  --pg_sink.v2--  ", "pg-sink-v2"), ("___", "")],
)
def test_sanitize_name(raw, expected):
    _require_imports()
    assert sanitize_name(raw) == expected
