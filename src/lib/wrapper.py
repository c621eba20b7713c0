"""
Capsule passthrough wrapper

Gemtext is already the capsule format, so a capsule page is the source
text, unchanged, between the gemtext wrapper's header and footer.
"""

from ..models.template import WrapperTemplate


def capsule_wrap(source: str, template: WrapperTemplate) -> str:
    """
    Wrap gemtext source for the capsule tree

    Args:
        source: Full text of the source file, not modified in any way
        template: Split gemtext wrapper

    Returns:
        header + source + footer
    """
    return template.splice(source)
