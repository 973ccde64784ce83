"""DataFlow Manifest — Migração Kafka Connect (core).

 - tabelas declarativas de classificação e de campos (`mapping`)
 - tipos de resultado (`types`)
 - migrador (`kafka_connect`)
"""

from .kafka_connect import (  # noqa: F401
    KafkaConnectMigrator,
    migrate_kafka_connect,
    parse_connectors,
    sanitize_name,
)
from .mapping import classify  # noqa: F401
from .types import (  # noqa: F401
    LegacyConnector,
    MigratedField,
    MigrationResult,
    UnsupportedField,
)
