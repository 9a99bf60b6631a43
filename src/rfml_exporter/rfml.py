"""RFML rendering.

RFML is a line-oriented text format describing a single test. A file
starts with a block of header comments followed by the test elements,
each separated by a blank line:

    #! login_test
    # title: Log in
    # start_uri: /login
    # tags: auth, smoke
    # browsers: chrome, firefox
    #

    Enter the credentials and press "Log in".
    Do you see the dashboard?

    # redirect: false
    - logout_test

Steps render as two lines, an action and a response. Embedded tests are
either inlined step by step or, when embedding is requested, rendered
as a single `- <rfml_id>` reference line optionally preceded by a
`# redirect:` annotation.
"""

from re import compile as regexp
from typing import TYPE_CHECKING

from rfml_exporter.errors import ErrorContext, RFMLFormatError
from rfml_exporter.schema import StepElement, TestElement

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

if TYPE_CHECKING:
    from rfml_exporter.schema import Element, Step, Test

ID_PREFIX = '#! '
COMMENT_PREFIX = '# '
EMPTY_COMMENT = '#'
REDIRECT_PREFIX = '# redirect: '
EMBED_PREFIX = '- '

#: Line breaks of any platform.
NEWLINES = regexp(r'\r\n|\r|\n')


def clean_text(value: str) -> str:
    """Collapse a multi-line text into one RFML line.

    Args:
        value: Raw text of a step or a header field.

    Returns:
        Text with every line break replaced by a space and surrounding
        whitespace removed.
    """
    return NEWLINES.sub(' ', value).strip()


def render_header(test: 'Test') -> str:
    """Render the header comments of a test.

    Only enabled browsers are listed. Every value is folded onto its line.

    Args:
        test: Test to describe.

    Returns:
        Header block without a trailing newline.
    """
    fields = (
        ('title', clean_text(test.title)),
        ('start_uri', clean_text(test.start_uri)),
        ('tags', ', '.join(clean_text(tag) for tag in test.tags)),
        ('browsers', ', '.join(clean_text(name) for name in test.enabled_browsers)),
    )

    return '\n'.join((
        f'{ID_PREFIX}{clean_text(test.rfml_id)}',
        *(f'{COMMENT_PREFIX}{name}: {value}' for name, value in fields),
        EMPTY_COMMENT,
    ))


def render_step(step: 'Step') -> str:
    """Render a step as an action line followed by a response line."""
    return f'{clean_text(step.action)}\n{clean_text(step.response)}'


def render_redirect(redirection: bool) -> str:
    """Render a redirect annotation line."""
    return f'{REDIRECT_PREFIX}{str(redirection).lower()}'


def iter_blocks(elements: 'Sequence[Element]', *,
                embed_tests: bool = False) -> 'Iterator[str]':
    """Iterate over rendered element blocks in source order.

    In inline mode embedded tests are replaced by their own elements,
    recursively, and no redirect annotations are produced. In embed mode
    every embedded test becomes a reference line and every element with
    an explicit redirection flag is preceded by its annotation.

    Args:
        elements: Elements of a test.
        embed_tests: Whether embedded tests are referenced instead of
            being inlined.

    Yields:
        Text blocks without trailing newlines, one per rendered element.

    Raises:
        RFMLFormatError: If an element is neither a step nor a test.
    """
    for element in elements:
        match element:
            case StepElement(element=step):
                block = render_step(step)
            case TestElement(element=embedded) if embed_tests:
                block = f'{EMBED_PREFIX}{clean_text(embedded.rfml_id)}'
            case TestElement(element=embedded):
                yield from iter_blocks(embedded.elements)
                continue
            case _:
                raise RFMLFormatError(
                    f'Unsupported element {type(element).__name__!r}',
                    context=ErrorContext(element=repr(element)),
                )

        if embed_tests and element.redirection is not None:
            block = f'{render_redirect(element.redirection)}\n{block}'

        yield block


def render(test: 'Test', *, embed_tests: bool = False) -> str:
    """Render a test into RFML text.

    Args:
        test: Test to render.
        embed_tests: Whether embedded tests are referenced by their RFML
            identifier instead of being inlined.

    Returns:
        RFML document terminated by a single newline.
    """
    blocks: 'Iterable[str]' = (
        render_header(test),
        *iter_blocks(test.elements, embed_tests=embed_tests),
    )

    return '\n\n'.join(blocks) + '\n'
