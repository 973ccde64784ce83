# src/dataflow_manifest/core/__init__.py
"""
Core do DataFlow Manifest.

Este pacote contém a implementação canônica, independente de transporte,
de todas as decisões não triviais do projeto: construção, validação,
serialização e migração de manifests DataFlow.

O core é projetado para ser:
    - determinístico
    - testável de forma isolada
    - livre de estado mutável compartilhado entre chamadas
    - orientado a contratos explícitos

Componentes principais:
    - manifest  → modelo de dados, serializer, validator e builder
    - catalog   → catálogos imutáveis de conectores e transformações
    - migration → tabelas declarativas e migrador Kafka Connect
    - config    → resolução de settings (merge, validação estrutural)

Princípios fundamentais:
    - Nenhuma decisão silenciosa: condições leves viram warnings explícitos
    - Tabelas de mapeamento são dados, não fluxo de controle
    - Toda falha é devolvida como dado estruturado ao chamador

Limites explícitos:
    - Não depende de transporte, CLI ou serviços externos
    - Não realiza I/O de rede
"""
