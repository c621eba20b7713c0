"""
Wrapper template model
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class WrapperTemplate:
    """
    Header and footer of a wrapper template, split at the content marker

    Attributes:
        header: Template text before the marker
        footer: Template text after the marker

    Example:
        >>> WrapperTemplate(header="HEADER", footer="FOOTER").splice("BODY")
        'HEADERBODYFOOTER'
    """
    header: str
    footer: str

    def splice(self, content: str) -> str:
        """Place content between header and footer"""
        return f"{self.header}{content}{self.footer}"
