# src/active_config/core/config/errors.py
"""
Exceções canônicas da camada de configuração do ActiveConfig.

Este módulo define a hierarquia oficial de exceções utilizadas durante
a resolução de arquivos, o carregamento (leitura, template e parse) e a
composição de snapshots de configuração.

Princípios fundamentais:
    - Exceções são tipadas e semânticas
    - Falhas de carregamento sempre identificam o arquivo ofensor
    - A causa original é preservada via encadeamento (`raise ... from`)

Invariantes:
    - Todas as exceções da biblioteca herdam de `ConfigError`
    - Toda `ConfigLoadError` carrega `path` absoluto e `cause`

Limites explícitos:
    - Não representa exceções levantadas por callbacks de usuário
    - Não realiza retry ou recovery
"""

from __future__ import annotations

from typing import Optional


class ConfigError(Exception):
    """
    Exceção base para erros relacionados à configuração do ActiveConfig.

    Permite captura genérica de qualquer falha da biblioteca sem
    capturar, por engano, erros de callbacks ou de código do chamador.
    """


class SearchPathNotConfiguredError(ConfigError):
    """
    Exceção levantada quando nenhum search path foi informado.

    O search path vem da opção `path` ou da variável de ambiente
    `ACTIVE_CONFIG_PATH`; sem ele não existe onde procurar arquivos.
    """


class ConfigLoadError(ConfigError):
    """
    Falha ao carregar um arquivo de configuração existente.

    Decisões arquiteturais:
        - O erro nunca é cacheado: o próximo acesso tenta novamente
        - Snapshots de outras configurações não são afetados

    Attributes:
        path (str): Caminho absoluto do arquivo ofensor.
        cause (Optional[BaseException]): Exceção original.
    """

    def __init__(self, path: str, cause: Optional[BaseException] = None, message: Optional[str] = None):
        self.path = path
        self.cause = cause
        if message is None:
            message = f"while loading {path!r}: {cause!r}"
        super().__init__(message)


class FileReadError(ConfigLoadError):
    """Erro de I/O ao ler um arquivo que existia no momento da resolução."""


class TemplatePreprocessError(ConfigLoadError):
    """Erro ao renderizar o template de um arquivo que optou pelo pré-processamento."""


class ParseError(ConfigLoadError):
    """O parser YAML rejeitou o conteúdo (possivelmente pré-processado)."""


class InvalidConfigRootTypeError(ParseError):
    """
    Exceção levantada quando o conteúdo raiz do arquivo não é um mapa.

    Arquivos vazios são aceitos (contribuição vazia); listas ou escalares
    no root não podem participar do weave e são rejeitados.
    """
