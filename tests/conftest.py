# tests/conftest.py
"""
Fixtures compartilhados para testes do DataFlow Manifest.

Este módulo define fixtures reutilizáveis que fornecem:
- conectores Kafka Connect semelhantes aos retornados pela REST API
- um manifest mínimo e válido em texto
- settings isolados de variáveis de ambiente

Decisões arquiteturais:
    - Fixtures retornam dados novos a cada teste (sem estado compartilhado)
    - Conectores seguem o formato `{name, config}` da REST API do Connect
    - Imports do core são realizados de forma lazy para
      melhorar a clareza de erros durante falhas

Invariantes:
    - Nenhuma fixture realiza I/O
    - Nenhuma fixture contém lógica de domínio

Limites explícitos:
    - Não substituir testes de integração
    - Não acoplar testes a valores de `defaults.yaml` além do documentado
"""

import pytest


@pytest.fixture(autouse=True)
def _isolated_settings_env(monkeypatch):
    """Garante que um override local do desenvolvedor não vaze para os testes."""
    from dataflow_manifest.core.config import ENV_CONFIG_PATH

    monkeypatch.delenv(ENV_CONFIG_PATH, raising=False)


@pytest.fixture
def settings():
    """Settings padrão materializados sem tocar em filesystem."""
    from dataflow_manifest.core.config import Settings

    return Settings()


@pytest.fixture
def jdbc_sink_connector() -> dict:
    """
    Conector JDBC sink típico de um cluster Connect.

    Usado por:
        - Testes do migrador (caso de um único conector)
        - Testes da operação de migração (texto + notas)
    """
    return {
        "name": "pg-events-sink",
        "config": {
            "connector.class": "io.confluent.connect.jdbc.JdbcSinkConnector",
            "connection.url": "jdbc:postgresql://pg:5432/mydb",
            "table.name.format": "events",
            "topics": "events",
        },
    }


@pytest.fixture
def kafka_source_connector() -> dict:
    """Conector de leitura Kafka (MirrorMaker 2)."""
    return {
        "name": "Orders Mirror",
        "config": {
            "connector.class": "org.apache.kafka.connect.mirror.MirrorSourceConnector",
            "bootstrap.servers": "kafka-1:9092, kafka-2:9092",
            "topics": "orders",
            "group.id": "orders-mirror",
            "tasks.max": "2",
        },
    }


@pytest.fixture
def jdbc_source_connector() -> dict:
    return {
        "name": "users-source",
        "config": {
            "connector.class": "io.confluent.connect.jdbc.JdbcSourceConnector",
            "connection.url": "jdbc:postgresql://pg:5432/app",
            "table.whitelist": "users",
            "poll.interval.ms": "5000",
        },
    }


@pytest.fixture
def minimal_manifest_text() -> str:
    """Manifest mínimo e válido (sem transformações)."""
    return """\
apiVersion: dataflow.dataflow.io/v1
kind: DataFlow
metadata:
  name: kafka-to-postgresql
spec:
  source:
    type: kafka
    config:
      brokers:
      - localhost:9092
      topic: events
  sink:
    type: postgresql
    config:
      connectionString: postgres://localhost/db
      table: events
"""
