"""
Mini-PL Interpreter

This is the main entry point for the Mini-PL interpreter.

Workflow:
1. The command line is parsed into Options and logging is configured.
2. The source script is read from the file given on the command line.
3. The Lexer tokenizes the source code into meaningful tokens.
4. The Parser processes tokens into an AST following the language grammar.
5. The TypeChecker rejects ill-typed programs before anything runs.
6. The Interpreter walks the AST, evaluating expressions and executing statements.

The process exits with status 0 when the program ran to completion and 1
when any stage reported an error.
"""
import sys

from minipl.config import Options, configure_logging, parse_command_line_args
from minipl.exceptions import MiniPLError
from minipl.lexer import tokenize
from minipl.parser import Parser
from minipl.pipeline import run_source


def debug_print_tokens_ast(options: Options, source: str):
    """
    Print tokenized source and AST
    """
    tokens, token_map_literals = tokenize(source, options.input_file)
    if options.dump_tokens:
        print("\nTokens:\n")
        for tok in tokens:
            print(tok)
    if options.dump_ast:
        ast = Parser(tokens, token_map_literals, options.input_file).parse()
        print("\nAST:\n")
        for stmt in ast:
            print(stmt)
    print(" ")


def run_script(options: Options) -> int:
    """
    Run a Mini-PL script and return the process exit status.
    """
    try:
        with open(options.input_file, "r", encoding="utf-8") as f:
            code = f.read()
    except OSError as e:
        print(f"Cannot read {options.input_file}: {e.strerror}", file=sys.stderr)
        return 1

    if options.dump_tokens or options.dump_ast:
        try:
            debug_print_tokens_ast(options, code)
        except MiniPLError as e:
            print(f"Dump stopped early: {e}", file=sys.stderr)

    outcome = run_source(code, options.input_file)
    return outcome.exit_status


def main(argv: list[str]) -> int:
    """
    Entry point for the CLI.
    """
    options = parse_command_line_args(argv[1:])
    configure_logging(options.verbose)
    return run_script(options)


def run():
    """
    Console script entry point.
    """
    sys.exit(main(sys.argv))


if __name__ == "__main__":
    run()
