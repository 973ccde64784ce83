"""
KafkaConnectMigrator — tradução de um ou dois conectores Kafka Connect
para um manifest DataFlow.

Fluxo por chamada:
    1. normalização da entrada (lista de {name, config} ou texto JSON)
    2. classificação de cada conector via `connector.class`
    3. atribuição de papéis (source/sink)
    4. tradução de campos pelas tabelas de `mapping`
    5. checagem de campos obrigatórios no catálogo
    6. montagem do manifest pelo ManifestBuilder

Política de papéis:
    - um conector: ocupa o lado da sua categoria; o outro lado vira
      placeholder (`settings.placeholder_type`, config vazia) com warning.
      Um conector `unknown` sozinho ocupa o lado source.
    - dois conectores: categorias iguais (inclusive ambas `unknown`) são
      AmbiguousConnectorRoles; um `unknown` ao lado de um conhecido ocupa
      o lado oposto.

Migração nunca infere transformações.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from ..catalog import CONNECTOR_CATALOG, ConnectorCatalog, ConnectorCategory
from ..config import Settings, default_settings
from ..exceptions import AmbiguousConnectorRoles, InvalidInput
from ..manifest.builder import GenerationRequest, ManifestBuilder
from .mapping import UnmappableValue, classify, field_mappings_for, unsupported_reason
from .types import LegacyConnector, MigratedField, MigrationResult, UnsupportedField

logger = logging.getLogger(__name__)

_INPUT_HINT = "Envie um conector {name, config} ou uma lista com exatamente dois conectores."


@dataclass(frozen=True)
class _Classified:
    connector: LegacyConnector
    label: str
    connector_class: str
    category: ConnectorCategory
    target_type: str


def _get(config: Mapping[str, Any], key: str) -> Any:
    """Lookup exato e, em seguida, case-insensitive."""
    if key in config:
        return config[key]
    lowered = key.lower()
    for k, v in config.items():
        if str(k).lower() == lowered:
            return v
    return None


def sanitize_name(value: str) -> str:
    """Converte um nome de conector em nome válido de recurso (minúsculo, `-`)."""
    return re.sub(r"[^a-z0-9-]", "-", value.lower()).strip("-")


def parse_connectors(value: Any) -> List[LegacyConnector]:
    """Normaliza a entrada do chamador em conectores legados.

    Aceita uma lista de mapeamentos, um único mapeamento, ou texto JSON com
    um objeto ou um array.

    Raises:
        InvalidInput: JSON inválido, item que não é objeto, `config` ausente.
    """
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError as e:
            raise InvalidInput(
                message=f"invalid JSON: {e}",
                details={"field": "connectors"},
                hint=_INPUT_HINT,
            ) from e

    if isinstance(value, Mapping):
        value = [value]
    if not isinstance(value, Sequence) or isinstance(value, (str, bytes)):
        raise InvalidInput(
            message="connectors must be an object or a list of objects",
            details={"field": "connectors", "received": type(value).__name__},
            hint=_INPUT_HINT,
        )

    out: List[LegacyConnector] = []
    for i, item in enumerate(value):
        if not isinstance(item, Mapping):
            raise InvalidInput(
                message=f"connectors[{i}] must be an object",
                details={"field": f"connectors[{i}]", "received": type(item).__name__},
                hint=_INPUT_HINT,
            )
        config = item.get("config")
        if not isinstance(config, Mapping):
            raise InvalidInput(
                message=f"connectors[{i}] must have a 'config' object",
                details={"field": f"connectors[{i}].config"},
                hint=_INPUT_HINT,
            )
        name = item.get("name")
        out.append(LegacyConnector(name="" if name is None else str(name), config=dict(config)))
    return out


class KafkaConnectMigrator:
    """Migra configs Kafka Connect para manifests DataFlow."""

    def __init__(
        self,
        builder: Optional[ManifestBuilder] = None,
        catalog: Optional[ConnectorCatalog] = None,
        settings: Optional[Settings] = None,
    ):
        self.catalog = catalog or CONNECTOR_CATALOG
        self.builder = builder or ManifestBuilder(connectors=self.catalog)
        self.settings = settings or default_settings()

    # -----------------------------
    # Classificação
    # -----------------------------
    def _classify(self, index: int, connector: LegacyConnector, warnings: List[str]) -> _Classified:
        raw_class = _get(connector.config, "connector.class")
        connector_class = str(raw_class).strip() if raw_class is not None else ""
        label = connector.name or f"connectors[{index}]"

        rule = classify(connector_class)
        if rule is None:
            warnings.append(f"unrecognized connector class: {connector_class or '<missing>'}")
            logger.debug("connector %s: class %r not recognized", label, connector_class)
            return _Classified(
                connector=connector,
                label=label,
                connector_class=connector_class,
                category=ConnectorCategory.UNKNOWN,
                target_type=connector_class or "unknown",
            )

        if rule.note:
            warnings.append(f"{label}: {rule.note}")
        logger.debug("connector %s: %s -> %s/%s", label, connector_class, rule.category.value, rule.target_type)
        return _Classified(
            connector=connector,
            label=label,
            connector_class=connector_class,
            category=rule.category,
            target_type=rule.target_type,
        )

    # -----------------------------
    # Papéis
    # -----------------------------
    def _assign_roles(
        self, classified: List[_Classified], warnings: List[str]
    ) -> Tuple[Optional[_Classified], Optional[_Classified]]:
        if len(classified) == 1:
            only = classified[0]
            if only.category is ConnectorCategory.SINK:
                source, sink, missing = None, only, "source"
            elif only.category in (ConnectorCategory.SOURCE, ConnectorCategory.UNKNOWN):
                source, sink, missing = only, None, "sink"
            else:  # pragma: no cover
                raise AssertionError(f"unhandled category: {only.category}")
            warnings.append(
                f"only one side of the pipeline was supplied; spec.{missing}.type is "
                f"'{self.settings.placeholder_type}' and must be completed manually"
            )
            return source, sink

        first, second = classified
        if first.category is second.category:
            raise AmbiguousConnectorRoles(
                message=f"both connectors resolve to category '{first.category.value}'",
                details={
                    "connectors": [first.label, second.label],
                    "category": first.category.value,
                },
                hint="Forneça um conector source e um conector sink, ou migre-os separadamente.",
            )

        categories = (first.category, second.category)
        if ConnectorCategory.SOURCE in categories:
            source = first if first.category is ConnectorCategory.SOURCE else second
        elif ConnectorCategory.SINK in categories:
            source = second if first.category is ConnectorCategory.SINK else first
        else:  # pragma: no cover
            raise AssertionError(f"unhandled categories: {categories}")
        sink = second if source is first else first
        return source, sink

    # -----------------------------
    # Campos
    # -----------------------------
    def _translate(
        self,
        item: _Classified,
        migrated: List[MigratedField],
        unsupported: List[UnsupportedField],
    ) -> Dict[str, Any]:
        mappings = field_mappings_for(item.category, item.target_type)
        translated: Dict[str, Any] = {}
        filled_by: Dict[str, str] = {}

        for key, value in item.connector.config.items():
            key = str(key)
            mapping = mappings.get(key.lower())
            if mapping is None:
                unsupported.append(UnsupportedField(item.label, key, unsupported_reason(key)))
                continue

            target = mapping.target_field
            if target in filled_by:
                unsupported.append(
                    UnsupportedField(item.label, key, f"duplicate of {filled_by[target]} already mapped to {target}")
                )
                continue

            if value is None:
                unsupported.append(UnsupportedField(item.label, key, "empty value"))
                continue

            try:
                translated[target] = mapping.transform(value)
            except UnmappableValue as e:
                unsupported.append(UnsupportedField(item.label, key, e.reason))
                continue

            filled_by[target] = key
            migrated.append(MigratedField(item.label, key, target))

        logger.debug("connector %s: %d field(s) translated", item.label, len(translated))
        return translated

    def _check_required(
        self, item: _Classified, side: str, config: Dict[str, Any], warnings: List[str]
    ) -> None:
        if item.category is ConnectorCategory.UNKNOWN:
            return
        descriptor = self.catalog.lookup(item.target_type, item.category)
        if descriptor is None:
            return
        for required in sorted(descriptor.required_fields - set(config)):
            warnings.append(f"{side} {item.target_type}: required field '{required}' not set")

    # -----------------------------
    # API
    # -----------------------------
    def migrate(self, connectors: Any) -> MigrationResult:
        """Migra um ou dois conectores.

        Raises:
            InvalidInput: entrada malformada ou quantidade diferente de 1 ou 2.
            AmbiguousConnectorRoles: dois conectores na mesma categoria.
        """
        legacy = parse_connectors(connectors)
        if len(legacy) not in (1, 2):
            raise InvalidInput(
                message=f"expected 1 or 2 connectors, got {len(legacy)}",
                details={"field": "connectors", "count": len(legacy)},
                hint=_INPUT_HINT,
            )

        warnings: List[str] = []
        classified = [self._classify(i, c, warnings) for i, c in enumerate(legacy)]
        source, sink = self._assign_roles(classified, warnings)

        migrated: List[MigratedField] = []
        unsupported: List[UnsupportedField] = []
        # Ordem dos registros segue a ordem de entrada dos conectores
        configs: Dict[int, Dict[str, Any]] = {}
        for item in classified:
            configs[id(item)] = self._translate(item, migrated, unsupported)

        placeholder = self.settings.placeholder_type
        source_type, source_config = placeholder, {}
        sink_type, sink_config = placeholder, {}
        if source is not None:
            source_type, source_config = source.target_type, configs[id(source)]
            self._check_required(source, "source", source_config, warnings)
        if sink is not None:
            sink_type, sink_config = sink.target_type, configs[id(sink)]
            self._check_required(sink, "sink", sink_config, warnings)

        name = sanitize_name(legacy[0].name) or self.settings.fallback_name
        manifest = self.builder.build(
            GenerationRequest(
                source_type=source_type,
                sink_type=sink_type,
                source_config=source_config,
                sink_config=sink_config,
                name=name,
            )
        )

        for warning in warnings:
            logger.warning("migration %s: %s", name, warning)

        return MigrationResult(
            manifest=manifest,
            migrated_fields=migrated,
            unsupported_fields=unsupported,
            warnings=warnings,
        )


def migrate_kafka_connect(connectors: Any, *, settings: Optional[Settings] = None) -> MigrationResult:
    """Atalho funcional para `KafkaConnectMigrator().migrate`."""
    return KafkaConnectMigrator(settings=settings).migrate(connectors)
