# src/active_config/core/config/template.py
"""
Pré-processamento opcional de arquivos de configuração via Jinja2.

Um arquivo só é renderizado como template quando contém, em uma linha
própria, o marcador de opt-in:

    # ACTIVE_CONFIG: TEMPLATE

(`JINJA`, `JINJA2` e `ERB` também são aceitos; o marcador não diferencia
maiúsculas de minúsculas.)

Variáveis disponíveis no template:
    - active_config.config_file       → caminho absoluto do arquivo
    - active_config.config_directory  → diretório do arquivo
    - active_config.config_name       → nome lógico da configuração
    - active_config.config_files      → lista de FileDescriptor em carregamento
    - env                             → variáveis de ambiente do processo

Limites explícitos:
    - Não faz parse de YAML
    - Não acessa outros arquivos (sem loader de templates)
"""

from __future__ import annotations

import os
import re
from typing import Sequence

from jinja2 import Environment, StrictUndefined, TemplateError

from .errors import TemplatePreprocessError
from .resolver import FileDescriptor


TEMPLATE_MARKER = re.compile(
    r"^\s*#\s*ACTIVE_CONFIG\s*:\s*(?:TEMPLATE|JINJA2?|ERB)\b",
    re.IGNORECASE | re.MULTILINE,
)

_environment = Environment(
    undefined=StrictUndefined,
    keep_trailing_newline=True,
    autoescape=False,
)


def wants_template(text: str) -> bool:
    return TEMPLATE_MARKER.search(text) is not None


def render_template(
    text: str,
    *,
    path: str,
    name: str,
    files: Sequence[FileDescriptor],
) -> str:
    """
    Renderiza `text` com as variáveis do arquivo em carregamento.

    Raises:
        TemplatePreprocessError: Se o Jinja2 rejeitar ou falhar ao avaliar o template.
    """
    context = {
        "config_file": path,
        "config_directory": os.path.dirname(path),
        "config_name": name,
        "config_files": list(files),
    }
    try:
        return _environment.from_string(text).render(active_config=context, env=dict(os.environ))
    except TemplateError as err:
        raise TemplatePreprocessError(path, err) from err
