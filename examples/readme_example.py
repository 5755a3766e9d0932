from dataclasses import dataclass, field
from datetime import date

from configure import K, Configurable, ValueConfigurable, configure


@dataclass
class Insets(ValueConfigurable):
    top: float = 0.0
    left: float = 0.0


@dataclass
class Theme(ValueConfigurable):
    """Value type: every helper returns a new theme."""

    font: str = "system"
    size: float = 12.0
    padding: Insets = field(default_factory=Insets)


class Button(Configurable):
    """Reference type: helpers configure this very instance."""

    title: str
    enabled: bool
    theme: Theme

    def __init__(self) -> None:
        self.title = ""
        self.enabled = True
        self.theme = Theme()


def main() -> None:
    base = Theme(font="serif")
    large = base.set(K.size, 18.0).set(K.padding.top, 4.0)
    print(f"base theme unchanged: {base}")
    print(f"derived theme:        {large}")

    button = (
        Button()
        .set(K.title, "Save")
        .set("theme", large)
        .then(lambda b: print(f"configuring {b.title!r}"))
    )
    button.theme.mutate(lambda t: setattr(t, "font", "mono"))
    print(f"button font: {button.theme.font}, derived theme font still: {large.font}")

    disabled = configure(Button(), title="Cancel", enabled=False)
    disabled.do(lambda b: print(f"{b.title} enabled={b.enabled}"))

    stamp = Theme().let(lambda t: f"{t.font}@{date.today():%Y-%m-%d}")
    print(stamp)


if __name__ == "__main__":
    main()
