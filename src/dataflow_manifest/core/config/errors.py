# src/dataflow_manifest/core/config/errors.py
"""
Exceções canônicas da camada de settings do DataFlow Manifest.

Este módulo define a hierarquia oficial de exceções utilizadas durante
o carregamento, merge e materialização dos settings do serviço.

As exceções aqui definidas representam **erros de implantação**
(arquivo ausente, formato desconhecido, valor inválido), e não erros
de requisição: entradas de chamadores nunca levantam `SettingsError`.

Invariantes:
    - Todas as exceções de settings herdam de `SettingsError`
    - Nenhuma exceção representa erro de manifest ou de migração

Limites explícitos:
    - Não realiza fallback ou recovery
    - Não depende de manifest, catálogo ou migração
"""


class SettingsError(Exception):
    """
    Exceção base para erros relacionados aos settings do DataFlow Manifest.

    Esta hierarquia permite:
        - captura genérica de erros de settings
        - distinção clara entre falhas de implantação e falhas de requisição
    """


class SettingsFileNotFoundError(SettingsError):
    """
    Exceção levantada quando um arquivo de settings informado explicitamente
    não existe.

    Decisões arquiteturais:
        - Um override indicado por parâmetro ou variável de ambiente é intencional
        - A ausência do arquivo nesse caso é erro, não é ignorada
    """


class UnsupportedSettingsFormatError(SettingsError):
    """
    Exceção levantada quando o formato do arquivo de settings não é suportado.

    Formatos suportados (v1):
        - YAML (.yaml, .yml)
        - JSON (.json)

    Limites explícitos:
        - Não tenta inferir formato por conteúdo
    """


class InvalidSettingsRootTypeError(SettingsError):
    """
    Exceção levantada quando o conteúdo raiz do arquivo de settings
    não é um dicionário (`dict`).
    """


class SettingsTypeConflictError(SettingsError):
    """
    Exceção levantada quando ocorre conflito de tipos durante o deep-merge.

    Exemplo de conflito:
        - defaults: {"serializer": {"indent": 2}}
        - override: {"serializer": "compact"}

    Invariantes:
        - Nenhum merge parcial é produzido em caso de conflito
    """


class InvalidSettingsValueError(SettingsError):
    """
    Exceção levantada quando um valor resolvido não respeita o domínio
    esperado (ex.: `serializer.indent` negativo, nível de log desconhecido).
    """
