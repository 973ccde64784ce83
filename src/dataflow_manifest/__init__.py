# src/dataflow_manifest/__init__.py
"""
DataFlow Manifest — geração, validação e migração de manifests DataFlow.

Este pacote raiz define o namespace público do projeto, que expõe um
conjunto pequeno de operações request/response sobre o manifest
declarativo de pipelines DataFlow.

Operações públicas (ver `operations`):
    - generate_dataflow_manifest        → manifest a partir de source/sink
    - validate_dataflow_manifest        → validação estrutural de um manifest
    - migrate_kafka_connect_to_dataflow → tradução de conectores Kafka Connect
    - list_dataflow_connectors          → catálogo de conectores
    - list_dataflow_transformations     → catálogo de transformações

Configuração de log (opcional, nunca feita no import):
    - setup_logging                     → handler stderr no logger `dataflow_manifest`

Arquitetura em alto nível:
    - core.manifest  → modelo, serializer, validator e builder do manifest
    - core.catalog   → catálogos imutáveis de conectores e transformações
    - core.migration → classificação e tradução de configs Kafka Connect
    - core.config    → settings (defaults empacotados + override local)

Limites explícitos:
    - Não interage com cluster, orquestrador ou backend de métricas
    - Não persiste nada além da troca request/response
    - Não implementa transporte (o chamador serializa entrada e saída)
"""

from .operations import (
    generate_dataflow_manifest,
    list_dataflow_connectors,
    list_dataflow_transformations,
    migrate_kafka_connect_to_dataflow,
    validate_dataflow_manifest,
)
from .logging_setup import setup_logging

__version__ = "0.1.0"

__all__ = [
    "generate_dataflow_manifest",
    "validate_dataflow_manifest",
    "migrate_kafka_connect_to_dataflow",
    "list_dataflow_connectors",
    "list_dataflow_transformations",
    "setup_logging",
]
