"""Build the text sent to the NestJS REPL for a method."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from nest_repl.models import MethodInfo, Parameter
from nest_repl.utils.exceptions import ValidationError

AskFunc = Callable[[str], "str | None"]


@dataclass(frozen=True)
class Invocation:
    """A call of ``method`` on the provider ``class_name`` resolved by the REPL."""

    class_name: str
    method: MethodInfo
    values: tuple[str, ...] = field(default_factory=tuple)
    assign: bool = False
    always_await: bool = False

    def __post_init__(self) -> None:
        expected = len(self.method.args)
        if len(self.values) != expected:
            msg = (
                f"{self.method.name} takes {expected} argument(s), "
                f"got {len(self.values)}"
            )
            raise ValidationError(msg, field="values", value=list(self.values))

    @property
    def use_await(self) -> bool:
        return self.always_await or self.method.is_async

    def render(self) -> str:
        """Render ``[let m = ][await ]$(Class).m(v0, v1)``."""
        call = f"$({self.class_name}).{self.method.name}({', '.join(self.values)})"
        if self.use_await:
            call = f"await {call}"
        if self.assign:
            return f"let {self.method.name} = {call}"
        return call


def build_invocation(
    class_name: str,
    method: MethodInfo,
    values: Sequence[str] = (),
    assign: bool = False,
    always_await: bool = False,
) -> str:
    """Render the REPL expression calling ``method`` with literal ``values``."""
    return Invocation(
        class_name=class_name,
        method=method,
        values=tuple(values),
        assign=assign,
        always_await=always_await,
    ).render()


def argument_prompt(param: Parameter) -> str:
    """Prompt label for one parameter, e.g. ``"id: number "``."""
    return f"{param.name}: {param.type} "


def collect_arguments(
    method: MethodInfo, ask: AskFunc, given: Sequence[str] = ()
) -> list[str] | None:
    """Ask for one literal value per parameter, in declared order.

    Values in ``given`` fill the leading parameters and are not asked for.
    ``ask`` returns None when the user cancels; collection then stops and
    None is returned.
    """
    values = list(given[: len(method.args)])
    for param in method.args[len(values) :]:
        answer = ask(argument_prompt(param))
        if answer is None:
            return None
        values.append(answer)
    return values
