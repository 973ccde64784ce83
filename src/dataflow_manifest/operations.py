"""
DataFlow Manifest — superfície de operações.

As cinco operações expostas ao transporte (ex.: servidor MCP, CLI):

    - generate_dataflow_manifest
    - validate_dataflow_manifest
    - migrate_kafka_connect_to_dataflow
    - list_dataflow_connectors
    - list_dataflow_transformations

Contrato com o transporte: dados puros entram, dados puros (ou uma
DataflowException tipada) saem. Para serializar falhas use
`dataflow_manifest.core.errors.error_payload_from_exception`.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .core.catalog import CONNECTOR_CATALOG, TRANSFORMATION_CATALOG
from .core.config import Settings, default_settings
from .core.manifest import (
    GenerationRequest,
    ManifestBuilder,
    to_text,
    validate_manifest_text,
)
from .core.migration import KafkaConnectMigrator

GENERATION_HEADER = "Generated DataFlow manifest"
MIGRATION_HEADER = "DataFlow manifest generated from Kafka Connect config"


def generate_dataflow_manifest(
    source_type: str,
    sink_type: str,
    source_config: Any = None,
    sink_config: Any = None,
    transformations: Any = None,
    name: Optional[str] = None,
    namespace: Optional[str] = None,
    description: Optional[str] = None,
    *,
    settings: Optional[Settings] = None,
) -> str:
    """Gera o texto YAML de um manifest DataFlow.

    Tipos fora do catálogo não falham: viram linhas `# Warning:` no
    cabeçalho (quando `serializer.header_comments` está ligado) e um
    registro de log.

    Raises:
        InvalidInput: `source_type` ou `sink_type` ausente; `name`,
            `namespace` ou `description` que não são texto.
        InvalidConfig: config ou transformação malformada.
    """
    settings = settings or default_settings()
    builder = ManifestBuilder()
    manifest = builder.build(
        GenerationRequest(
            source_type=source_type,
            sink_type=sink_type,
            source_config=source_config,
            sink_config=sink_config,
            transformations=transformations,
            name=name,
            namespace=namespace,
            description=description,
        )
    )
    advisories = builder.advisories(manifest)

    header: List[str] = []
    if settings.header_comments:
        header.append(GENERATION_HEADER)
        if description and description.strip():
            header.append(f"Description: {description.strip()}")
        header.extend(f"Warning: {note}" for note in advisories)

    return to_text(manifest, header=header, indent=settings.indent)


def validate_dataflow_manifest(config: Any) -> Dict[str, Any]:
    """Valida o texto de um manifest; retorna `{valid, errors}`.

    Nunca lança por causa do conteúdo: erro de parse vira um único erro.
    """
    return validate_manifest_text(config).to_dict()


def migrate_kafka_connect_to_dataflow(
    connectors: Any,
    *,
    settings: Optional[Settings] = None,
) -> Dict[str, Any]:
    """Migra um ou dois conectores Kafka Connect.

    Retorna `{manifest, migratedFields, unsupportedFields, warnings}` com
    `manifest` em texto YAML; os warnings também aparecem como notas no
    cabeçalho do texto.

    Raises:
        InvalidInput: entrada malformada ou quantidade diferente de 1 ou 2.
        AmbiguousConnectorRoles: dois conectores na mesma categoria.
    """
    settings = settings or default_settings()
    result = KafkaConnectMigrator(settings=settings).migrate(connectors)

    header: List[str] = []
    if settings.header_comments:
        header.append(MIGRATION_HEADER)
        header.extend(f"- {warning}" for warning in result.warnings)

    payload = result.to_dict()
    payload["manifest"] = to_text(result.manifest, header=header, indent=settings.indent)
    return payload


def list_dataflow_connectors() -> List[Dict[str, Any]]:
    """Catálogo de conectores, ordenado por (type, category)."""
    return [d.to_dict() for d in CONNECTOR_CATALOG.list()]


def list_dataflow_transformations() -> List[Dict[str, Any]]:
    """Catálogo de transformações, ordenado por type."""
    return [d.to_dict() for d in TRANSFORMATION_CATALOG.list()]
