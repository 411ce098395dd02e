from dataclasses import dataclass

from heatmap_proxy.core.errors import ValidationError


DEFAULT_THEME = "github"


@dataclass(frozen=True)
class Theme:
    """Named palette, ordered from the busiest day colour to the idle one."""

    name: str
    palette: tuple[str, str, str, str, str]


THEMES: dict[str, Theme] = {
    "github": Theme(
        name="github",
        palette=("#216e39", "#30a14e", "#40c463", "#9be9a8", "#ebedf0"),
    ),
    "halloween": Theme(
        name="halloween",
        palette=("#03001c", "#fe9600", "#ffc501", "#ffee4a", "#ebedf0"),
    ),
    "ocean": Theme(
        name="ocean",
        palette=("#0a3069", "#0969da", "#54aeff", "#b6e3ff", "#ebedf0"),
    ),
    "mono": Theme(
        name="mono",
        palette=("#24292f", "#57606a", "#8c959f", "#d0d7de", "#f6f8fa"),
    ),
}


def list_themes() -> list[str]:
    return sorted(THEMES)


def get_theme(name: str | None) -> Theme:
    """Look up a theme by name, falling back to the default when unset."""

    key = (name or DEFAULT_THEME).strip().lower()
    theme = THEMES.get(key)
    if theme is None:
        raise ValidationError(
            f"Unknown theme '{name}'. Available themes: {', '.join(list_themes())}"
        )
    return theme
