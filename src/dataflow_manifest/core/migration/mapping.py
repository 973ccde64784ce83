"""
Tabelas declarativas da migração Kafka Connect → DataFlow (v1).

Tudo aqui é dado imutável construído na importação:
    - CONNECTOR_CLASS_RULES: classe exata → (categoria, tipo DataFlow)
    - CONNECTOR_CLASS_PATTERNS: tokens procurados no nome simples da classe,
      em ordem; primeiro casamento vence
    - FIELD_MAPPINGS: (categoria, tipo DataFlow) → campos legados traduzíveis
    - FIELD_REASONS / FIELD_PREFIX_REASONS: motivos dedicados para campos
      sem equivalente

Adicionar uma classe de conector ou um campo é uma linha nova nestas
tabelas; `classify` e o migrador não mudam.

O conjunto é fechado: classes fora das tabelas são `unknown` e campos fora
de FIELD_MAPPINGS são reportados como não suportados.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from ..catalog import ConnectorCategory

SOURCE = ConnectorCategory.SOURCE
SINK = ConnectorCategory.SINK

DEFAULT_UNSUPPORTED_REASON = "no DataFlow equivalent for connector.class-specific option"


class UnmappableValue(Exception):
    """O campo tem mapeamento, mas este valor específico não é traduzível."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


# ---------------------------------------------------------------------------
# Classificação
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ClassRule:
    category: ConnectorCategory
    target_type: str
    note: Optional[str] = None


@dataclass(frozen=True)
class ClassPattern:
    tokens: Tuple[str, ...]
    rule: ClassRule


_CDC_NOTE = (
    "change data capture is not preserved; DataFlow polls the table. "
    "If the CDC topic already exists, use a kafka source instead"
)

CONNECTOR_CLASS_RULES: Mapping[str, ClassRule] = MappingProxyType({
    "io.confluent.connect.jdbc.JdbcSourceConnector": ClassRule(SOURCE, "postgresql"),
    "io.confluent.connect.jdbc.JdbcSinkConnector": ClassRule(SINK, "postgresql"),
    "io.debezium.connector.postgresql.PostgresConnector": ClassRule(SOURCE, "postgresql", note=_CDC_NOTE),
    "io.debezium.connector.v2.postgresql.PostgresConnectorV2": ClassRule(SOURCE, "postgresql", note=_CDC_NOTE),
    "org.apache.kafka.connect.mirror.MirrorSourceConnector": ClassRule(SOURCE, "kafka"),
    "io.confluent.connect.replicator.ReplicatorSourceConnector": ClassRule(SOURCE, "kafka"),
})

CONNECTOR_CLASS_PATTERNS: Tuple[ClassPattern, ...] = (
    ClassPattern(("jdbc", "sink"), ClassRule(SINK, "postgresql")),
    ClassPattern(("postgres", "sink"), ClassRule(SINK, "postgresql")),
    ClassPattern(("jdbc", "source"), ClassRule(SOURCE, "postgresql")),
    ClassPattern(("kafka", "sink"), ClassRule(SINK, "kafka")),
    ClassPattern(("kafka", "source"), ClassRule(SOURCE, "kafka")),
    ClassPattern(("mirror", "source"), ClassRule(SOURCE, "kafka")),
)


def classify(connector_class: str) -> Optional[ClassRule]:
    """Resolve a classe do conector; `None` quando a classe não é reconhecida."""
    rule = CONNECTOR_CLASS_RULES.get(connector_class)
    if rule is not None:
        return rule

    simple = connector_class.rsplit(".", 1)[-1].lower()
    if not simple:
        return None
    for pattern in CONNECTOR_CLASS_PATTERNS:
        if all(token in simple for token in pattern.tokens):
            return pattern.rule
    return None


# ---------------------------------------------------------------------------
# Transformações de valor
# ---------------------------------------------------------------------------

def identity(value: Any) -> Any:
    return value


def split_list(value: Any) -> List[str]:
    raw = value if isinstance(value, list) else str(value).split(",")
    items = [str(x).strip() for x in raw if str(x).strip()]
    if not items:
        raise UnmappableValue("empty list")
    return items


def single_or_list(value: Any) -> Any:
    items = split_list(value)
    return items[0] if len(items) == 1 else items


def to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise UnmappableValue(f"expected an integer, got '{value}'")
    try:
        return int(str(value).strip())
    except ValueError:
        raise UnmappableValue(f"expected an integer, got '{value}'") from None


def to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in {"true", "false"}:
        return text == "true"
    raise UnmappableValue(f"expected true/false, got '{value}'")


def ms_to_duration(value: Any) -> str:
    ms = to_int(value)
    if ms < 0:
        raise UnmappableValue(f"negative interval: {ms}")
    return f"{ms // 1000}s" if ms % 1000 == 0 else f"{ms}ms"


def insert_mode_to_upsert(value: Any) -> bool:
    mode = str(value).strip().lower()
    if mode == "upsert":
        return True
    if mode == "insert":
        return False
    raise UnmappableValue(f"insert.mode '{value}' has no DataFlow equivalent")


_CONVERTER_FORMATS: Mapping[str, str] = MappingProxyType({
    "io.confluent.connect.avro.AvroConverter": "avro",
    "org.apache.kafka.connect.json.JsonConverter": "json",
    "io.confluent.connect.json.JsonSchemaConverter": "json",
})


def converter_format(value: Any) -> str:
    fmt = _CONVERTER_FORMATS.get(str(value).strip())
    if fmt is None:
        raise UnmappableValue(f"converter {value} has no DataFlow format")
    return fmt


def schema_registry(value: Any) -> Dict[str, str]:
    url = str(value).strip()
    if not url:
        raise UnmappableValue("empty schema registry url")
    return {"url": url}


# ---------------------------------------------------------------------------
# Tabelas de campos
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldMapping:
    source_field: str
    target_field: str
    transform: Callable[[Any], Any] = identity


FIELD_MAPPINGS: Mapping[Tuple[ConnectorCategory, str], Tuple[FieldMapping, ...]] = MappingProxyType({
    (SOURCE, "kafka"): (
        FieldMapping("bootstrap.servers", "brokers", split_list),
        FieldMapping("topics", "topic", single_or_list),
        FieldMapping("topic", "topic", single_or_list),
        FieldMapping("group.id", "consumerGroup"),
        FieldMapping("consumer.group", "consumerGroup"),
        FieldMapping("value.converter", "format", converter_format),
        FieldMapping("schema.registry.url", "schemaRegistry", schema_registry),
        FieldMapping("value.converter.schema.registry.url", "schemaRegistry", schema_registry),
    ),
    (SINK, "kafka"): (
        FieldMapping("bootstrap.servers", "brokers", split_list),
        FieldMapping("topics", "topic", single_or_list),
        FieldMapping("topic", "topic", single_or_list),
    ),
    (SOURCE, "postgresql"): (
        FieldMapping("connection.url", "connectionString"),
        FieldMapping("table.whitelist", "table", single_or_list),
        FieldMapping("table.include.list", "table", single_or_list),
        FieldMapping("query", "query"),
        FieldMapping("poll.interval.ms", "pollInterval", ms_to_duration),
    ),
    (SINK, "postgresql"): (
        FieldMapping("connection.url", "connectionString"),
        FieldMapping("table.name.format", "table"),
        FieldMapping("batch.size", "batchSize", to_int),
        FieldMapping("auto.create", "autoCreateTable", to_bool),
        FieldMapping("insert.mode", "upsertMode", insert_mode_to_upsert),
        FieldMapping("pk.fields", "conflictKey", split_list),
    ),
})


FIELD_REASONS: Mapping[str, str] = MappingProxyType({
    "connector.class": "used only to classify the connector; DataFlow selects it through spec type",
    "name": "Kafka Connect connector name; the manifest name is set in metadata.name",
    "tasks.max": "Kafka Connect task parallelism has no DataFlow equivalent",
    "key.converter": "Kafka Connect converters have no DataFlow equivalent",
    "value.converter": "Kafka Connect converters have no DataFlow equivalent",
    "topics": "input topics of a sink are read by the DataFlow source; configure them there",
    "topics.regex": "topic patterns are not supported by DataFlow",
    "connection.user": "credentials must be embedded in connectionString",
    "connection.password": "credentials must be embedded in connectionString",
})

FIELD_PREFIX_REASONS: Tuple[Tuple[str, str], ...] = (
    ("transforms", "single message transforms are not migrated; declare DataFlow transformations explicitly"),
    ("predicates", "single message transform predicates are not migrated"),
    ("errors.", "Kafka Connect error handling has no DataFlow equivalent"),
    ("key.converter.", "Kafka Connect converter options have no DataFlow equivalent"),
    ("value.converter.", "Kafka Connect converter options have no DataFlow equivalent"),
    ("consumer.override.", "client overrides are not migrated"),
    ("producer.override.", "client overrides are not migrated"),
)


def unsupported_reason(field_name: str) -> str:
    key = field_name.lower()
    reason = FIELD_REASONS.get(key)
    if reason is not None:
        return reason
    for prefix, prefix_reason in FIELD_PREFIX_REASONS:
        if key.startswith(prefix):
            return prefix_reason
    return DEFAULT_UNSUPPORTED_REASON


def field_mappings_for(category: ConnectorCategory, target_type: str) -> Dict[str, FieldMapping]:
    """Índice case-insensitive dos mapeamentos de um tipo de destino."""
    return {m.source_field.lower(): m for m in FIELD_MAPPINGS.get((category, target_type), ())}
