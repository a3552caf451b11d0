from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Iterator, NoReturn, Optional
import json
import sys

import typer

from callsite_edit.config import (
    literal_name_enabled,
    merge_payload,
    rewrite_defaults,
    source_encoding,
    verbose_enabled,
)
from callsite_edit.exceptions import OutputWriteError, RewriteError
from callsite_edit.rewrite.engine import RewriteEngine
from callsite_edit.rewrite.model import (
    ArgumentEdit,
    InsertArgument,
    MoveArgument,
    RemoveArgument,
    RewriteRequest,
    RewrittenLine,
)
from callsite_edit.schema import RewriteSummaryDTO

app = typer.Typer(
    add_completion=False,
    help="Rewrite positional arguments of calls to a named function.",
)

_STDOUT_ALIAS = "-"


@dataclass(frozen=True)
class RewriteCommonOptions:
    source_file: Path
    fn_name: str
    root: Optional[Path] = None
    config: Optional[Path] = None
    output: Optional[Path] = None
    summary_json: Optional[Path] = None
    literal_name: Optional[bool] = None
    encoding: Optional[str] = None
    verbose: Optional[bool] = None


def _fail(exc: RewriteError) -> NoReturn:
    typer.secho(str(exc), err=True, fg=typer.colors.RED)
    raise typer.Exit(code=exc.exit_code)


def _is_stdout_target(target: Optional[Path]) -> bool:
    return target is None or str(target) == _STDOUT_ALIAS


@contextmanager
def _output_writer(target: Optional[Path], *, encoding: str) -> Iterator[Callable[[str], None]]:
    if _is_stdout_target(target):
        # Payload bypasses echo, which strips ANSI escapes off a non-tty stream.
        stream = sys.stdout

        def _write_stdout(text: str) -> None:
            stream.write(text)
            stream.flush()

        yield _write_stdout
        return
    # newline="" keeps the source's own line terminators.
    with target.open("w", encoding=encoding, newline="") as handle:
        def _write(text: str) -> None:
            handle.write(text)
            handle.flush()

        yield _write


def _output_error(exc: OSError, request: RewriteRequest, target: Optional[Path]) -> OutputWriteError:
    return OutputWriteError(
        f"cannot write output: {exc}",
        operation=request.operation,
        fn_name=request.fn_name,
        path=_STDOUT_ALIAS if _is_stdout_target(target) else str(target),
    )


def _echo_edits(line: RewrittenLine, *, source_file: str) -> None:
    for site, replacement in zip(line.call_sites, line.replacements):
        if site.call_text == replacement:
            continue
        typer.echo(
            f"{source_file}:{line.number}: {site.call_text} -> {replacement}",
            err=True,
        )


def _write_summary(target: Path, engine: RewriteEngine) -> None:
    request = engine.request
    summary = RewriteSummaryDTO(
        operation=request.operation,
        fn_name=request.fn_name,
        source_file=request.source_file,
        lines=engine.summary.lines,
        call_sites=engine.summary.call_sites,
        edited_call_sites=engine.summary.edited_call_sites,
    )
    payload = json.dumps(summary.model_dump(), indent=2, sort_keys=True)
    try:
        target.write_text(payload + "\n", encoding="utf-8")
    except OSError as exc:
        raise _output_error(exc, request, target) from exc


def _run_rewrite(options: RewriteCommonOptions, edit: ArgumentEdit) -> None:
    defaults = rewrite_defaults(root=options.root, config_path=options.config)
    settings = merge_payload(
        {
            "literal_name": options.literal_name,
            "encoding": options.encoding,
            "verbose": options.verbose,
        },
        defaults,
    )
    request = RewriteRequest(
        source_file=str(options.source_file),
        fn_name=options.fn_name,
        edit=edit,
        literal_name=literal_name_enabled(settings),
        encoding=source_encoding(settings),
    )
    verbose = verbose_enabled(settings)
    engine = RewriteEngine(request)
    try:
        lines = engine.iter_lines()
        try:
            with _output_writer(options.output, encoding=request.encoding) as write:
                for line in lines:
                    write(line.rendered)
                    if verbose and line.changed:
                        _echo_edits(line, source_file=request.source_file)
        except OSError as exc:
            raise _output_error(exc, request, options.output) from exc
        if options.summary_json is not None:
            _write_summary(options.summary_json, engine)
    except RewriteError as exc:
        _fail(exc)


@app.command("add")
def add(
    source_file: Path = typer.Option(..., "--source-file", "-s"),
    fn_name: str = typer.Option(..., "--fn-name", "-f"),
    expected_params_count: int = typer.Option(
        ..., "--expected-params-count", "-e", min=0
    ),
    param_to_set: int = typer.Option(
        ..., "--param-to-set", "-p", min=1, help="1-based position of the new argument."
    ),
    value_to_set: str = typer.Option(..., "--value-to-set", "-v"),
    root: Optional[Path] = typer.Option(None, "--root"),
    config: Optional[Path] = typer.Option(None, "--config"),
    output: Optional[Path] = typer.Option(
        None, "--output", help="Write the rewritten file here ('-' for stdout)."
    ),
    summary_json: Optional[Path] = typer.Option(None, "--summary-json"),
    literal_name: Optional[bool] = typer.Option(
        None, "--literal-name/--regex-name"
    ),
    encoding: Optional[str] = typer.Option(None, "--encoding"),
    verbose: Optional[bool] = typer.Option(None, "--verbose/--quiet"),
) -> None:
    """Insert a literal argument into calls with fewer than the expected count."""
    _run_rewrite(
        RewriteCommonOptions(
            source_file=source_file,
            fn_name=fn_name,
            root=root,
            config=config,
            output=output,
            summary_json=summary_json,
            literal_name=literal_name,
            encoding=encoding,
            verbose=verbose,
        ),
        InsertArgument(
            expected_params_count=expected_params_count,
            param_to_set=param_to_set,
            value_to_set=value_to_set,
        ),
    )


@app.command("remove")
def remove(
    source_file: Path = typer.Option(..., "--source-file", "-s"),
    fn_name: str = typer.Option(..., "--fn-name", "-f"),
    expected_params_count: int = typer.Option(
        ..., "--expected-params-count", "-e", min=0
    ),
    param_to_remove: int = typer.Option(
        ..., "--param-to-remove", "-p", min=0, help="0-based index of the argument to drop."
    ),
    root: Optional[Path] = typer.Option(None, "--root"),
    config: Optional[Path] = typer.Option(None, "--config"),
    output: Optional[Path] = typer.Option(
        None, "--output", help="Write the rewritten file here ('-' for stdout)."
    ),
    summary_json: Optional[Path] = typer.Option(None, "--summary-json"),
    literal_name: Optional[bool] = typer.Option(
        None, "--literal-name/--regex-name"
    ),
    encoding: Optional[str] = typer.Option(None, "--encoding"),
    verbose: Optional[bool] = typer.Option(None, "--verbose/--quiet"),
) -> None:
    """Remove an argument from calls with more than the expected count."""
    _run_rewrite(
        RewriteCommonOptions(
            source_file=source_file,
            fn_name=fn_name,
            root=root,
            config=config,
            output=output,
            summary_json=summary_json,
            literal_name=literal_name,
            encoding=encoding,
            verbose=verbose,
        ),
        RemoveArgument(
            expected_params_count=expected_params_count,
            param_to_remove=param_to_remove,
        ),
    )


@app.command("move")
def move(
    source_file: Path = typer.Option(..., "--source-file", "-s"),
    fn_name: str = typer.Option(..., "--fn-name", "-f"),
    remove_index: int = typer.Option(..., "--remove-index", "-r", min=0),
    insert_index: int = typer.Option(..., "--insert-index", "-i", min=0),
    root: Optional[Path] = typer.Option(None, "--root"),
    config: Optional[Path] = typer.Option(None, "--config"),
    output: Optional[Path] = typer.Option(
        None, "--output", help="Write the rewritten file here ('-' for stdout)."
    ),
    summary_json: Optional[Path] = typer.Option(None, "--summary-json"),
    literal_name: Optional[bool] = typer.Option(
        None, "--literal-name/--regex-name"
    ),
    encoding: Optional[str] = typer.Option(None, "--encoding"),
    verbose: Optional[bool] = typer.Option(None, "--verbose/--quiet"),
) -> None:
    """Move an argument from one position to another in every call."""
    _run_rewrite(
        RewriteCommonOptions(
            source_file=source_file,
            fn_name=fn_name,
            root=root,
            config=config,
            output=output,
            summary_json=summary_json,
            literal_name=literal_name,
            encoding=encoding,
            verbose=verbose,
        ),
        MoveArgument(remove_index=remove_index, insert_index=insert_index),
    )


def main() -> None:  # pragma: no cover
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
