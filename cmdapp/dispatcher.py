"""
cmdapp dispatcher: hand a verified result sequence to the caller, in order.

- option results write their argument into the option's slot (when one was
  given), then either run the built-in help/version renderer (for --help and
  --version, unless overridden) or call on_option(short, long, value, data).
- plain arguments call on_argument(value, data).
- a callback left as None is skipped.
"""


def dispatch(
        results,
        on_option=None,
        on_argument=None,
        /,
        data=None,
        *,
        override_help=False,
        override_version=False,
        helper=None,
        versioner=None,
):
    """
    walk results in order and invoke the matching handler for each one.

    parameters
    - results: Iterable[ParseResult] (already verified)
    - on_option: Callable[[str | None, str, str | None, Any], Any] | None
    - on_argument: Callable[[str, Any], Any] | None
    - data: Any, forwarded untouched to every callback
    - override_help / override_version: route --help / --version to on_option
    - helper / versioner: zero-argument built-in renderers
    """
    for result in results:
        if (option := result.option) is None:
            if on_argument is not None:
                on_argument(result.value, data)
            continue

        if result.value is not None and option.slot is not None:
            option.slot.value = result.value

        if option.long == "help" and not override_help and helper is not None:
            helper()
        elif option.long == "version" and not override_version and versioner is not None:
            versioner()
        elif on_option is not None:
            on_option(option.short, option.long, result.value, data)


__all__ = (
    "dispatch",
)
