# This file is part of the minicpp project.
#
# Copyright (C) 2025 GiladLeef
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

import argparse
import logging
import sys

from minicpp.codegen import Codegen
from minicpp.errors import CompileError
from minicpp.lexer import Lexer
from minicpp.parser import Parser
from minicpp.runtime import RUNTIME_ERROR, execute, runProgram, splitInput

class Compiler:
    def __init__(self, maxDepth=200):
        self.lexer = Lexer()
        self.maxDepth = maxDepth

    def compileSource(self, sourceCode):
        tokens = self.lexer.lex(sourceCode)
        parser = Parser(tokens, maxDepth=self.maxDepth)
        statements = parser.parseProgram()
        code = Codegen().generateCode(statements)
        logging.debug("Generated %d lines of Python", code.count("\n"))
        return code

    def run(self, sourceCode, inputText=""):
        return execute(self.compileSource(sourceCode), splitInput(inputText))

    def compileAndRun(self, sourceCode, inputText=""):
        try:
            return self.run(sourceCode, inputText)
        except CompileError as e:
            logging.error("Compilation failed: %s", e)
            return "Error: " + str(e)

def buildArgParser():
    parser = argparse.ArgumentParser(prog="minicpp", description="Compile a small C++ subset to Python and run it.")
    parser.add_argument("source", help="source file, or - for stdin")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("-i", "--input", default="", help="program input text")
    group.add_argument("-f", "--input-file", help="read program input from a file")
    parser.add_argument("--emit", action="store_true", help="print the generated Python instead of running it")
    parser.add_argument("--max-depth", type=int, default=200, help="maximum statement/expression nesting")
    parser.add_argument("-v", "--verbose", action="store_true", help="log compiler stages")
    return parser

def readText(path):
    if path == "-":
        return sys.stdin.read()
    with open(path, "r", encoding="utf-8") as f:
        return f.read()

def main(argv=None):
    args = buildArgParser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s: %(message)s")
    sourceCode = readText(args.source)
    inputText = readText(args.input_file) if args.input_file else args.input

    try:
        code = Compiler(maxDepth=args.max_depth).compileSource(sourceCode)
    except CompileError as e:
        logging.error("Compilation failed: %s", e)
        print("Error: " + str(e))
        return 1

    if args.emit:
        sys.stdout.write(code)
        return 0

    try:
        output = runProgram(code, splitInput(inputText))
    except Exception as e:
        logging.debug("Program faulted", exc_info=True)
        print(RUNTIME_ERROR + str(e))
        return 2
    sys.stdout.write(output)
    return 0

if __name__ == "__main__":
    sys.exit(main())
