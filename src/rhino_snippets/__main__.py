"""CLI utilities for rhino-snippets.

Compiles Rhino action catalogs into VS Code snippet files and queries
completions for a cursor position of a test specification.
"""

from json import dumps
from pathlib import Path
from typing import TYPE_CHECKING

from click import Path as PathParam
from click import IntRange, argument, echo, group, option

from rhino_snippets.catalog import CatalogLoader
from rhino_snippets.provider import CompletionConfig, CompletionProvider, Position, TextDocument
from rhino_snippets.settings import EngineSettings
from rhino_snippets.snippets import CatalogSnippetSet

if TYPE_CHECKING:
    from rhino_snippets.catalog import CatalogSnapshot

InputFilepath = PathParam(
    exists=True,
    dir_okay=False,
    readable=True,
    path_type=Path,
)

OutputFilepath = PathParam(
    dir_okay=False,
    writable=True,
    path_type=Path,
)


def _dumps(content: object) -> str:
    """Serialize CLI output as indented JSON."""
    return dumps(content, ensure_ascii=False, indent=4)


def _load_catalog(catalog: Path, settings: EngineSettings) -> 'CatalogSnapshot':
    """Load a catalog file with the configured strictness."""
    return CatalogLoader(strict=settings.strict).load_file(catalog)


@group(help='Command-line utilities for Rhino snippet completions.')
def cli() -> None:
    """Root CLI group for rhino-snippets tools."""
    return None


@cli.command(
    name='snippets',
    help='Compile a catalog into a VS Code `.code-snippets` JSON document.',
)
@argument('catalog', type=InputFilepath)
@option(
    '-o', '--output',
    type=OutputFilepath,
    default=None,
    help='Write the snippets to a file instead of standard output.',
)
@option(
    '--strict',
    is_flag=True,
    default=False,
    help='Fail on invalid or duplicate catalog records.',
)
def compile_snippets(catalog: Path, output: Path | None, strict: bool) -> None:
    """Compile catalog snippets.

    Args:
        catalog: Path to the catalog file.
        output: Optional output path.
        strict: Whether to enable strict catalog loading.
    """
    settings = EngineSettings(**({'strict': True} if strict else {}))
    snapshot = _load_catalog(catalog, settings)

    content = _dumps({
        snippet.name: snippet.to_vscode()
        for snippet in CatalogSnippetSet(snapshot).compose()
    })

    if output is None:
        echo(content)
        return

    output.parent.mkdir(parents=True, exist_ok=True)
    with output.open('wt', encoding='utf-8') as stream:
        stream.write(content)
        stream.write('\n')


@cli.command(
    name='complete',
    help='Print completions offered at a cursor position of a test specification.',
)
@argument('catalog', type=InputFilepath)
@argument('document', type=InputFilepath)
@option('-l', '--line', type=IntRange(min=0), required=True, help='Zero-based cursor line.')
@option('-c', '--column', type=IntRange(min=0), required=True, help='Zero-based cursor column.')
@option('--section', default=None, help='Annotation name of the actions section.')
@option('--pattern', default=None, help='Action recognition regular expression.')
@option(
    '--strict',
    is_flag=True,
    default=False,
    help='Fail on invalid or duplicate catalog records.',
)
def complete(catalog: Path, document: Path, line: int, column: int,  # noqa: PLR0913
             section: str | None, pattern: str | None, strict: bool) -> None:
    """Print action and flag completions.

    Args:
        catalog: Path to the catalog file.
        document: Path to the test specification.
        line: Cursor line.
        column: Cursor column.
        section: Override of the actions section setting.
        pattern: Override of the action pattern setting.
        strict: Whether to enable strict catalog loading.
    """
    overrides = {
        'section': section,
        'action_pattern': pattern,
        'strict': strict or None,
    }
    settings = EngineSettings(**{
        name: value
        for name, value in overrides.items()
        if value is not None
    })

    config = CompletionConfig.from_settings(_load_catalog(catalog, settings), settings)
    text = TextDocument.from_text(document.read_text(encoding='utf-8'))
    position = Position(line=line, character=column)

    provider = CompletionProvider()

    echo(_dumps({
        'actions': [
            snippet.model_dump()
            for snippet in provider.compose_action_completions(config, text, position)
        ],
        'parameters': [
            flag.model_dump()
            for flag in provider.compose_parameter_completions(config, text, position)
        ],
    }))


if __name__ == '__main__':
    cli()
