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

import logging
import re

from minicpp.errors import LexicalError
from minicpp.lang import language
from minicpp.tokens import Token

class Lexer:
    def __init__(self, tokens=None, invisibleChars=None):
        if tokens is None:
            tokens = [(t["type"], t["regex"]) for t in language["tokens"]]
        if invisibleChars is None:
            invisibleChars = language["invisibleChars"]
        self.tokens = [(tokenType, re.compile(pattern)) for tokenType, pattern in tokens]
        self.invisible = dict.fromkeys(map(ord, invisibleChars))

    def normalize(self, characters):
        return characters.replace("\r\n", "\n").translate(self.invisible)

    def lex(self, characters):
        characters = self.normalize(characters)
        currPos = 0
        tokenList = []
        while currPos < len(characters):
            matchFound = None
            for tokenType, regex in self.tokens:
                matchFound = regex.match(characters, currPos)
                if matchFound:
                    # Comments and whitespace carry no type and emit nothing.
                    if tokenType is not None:
                        tokenList.append(Token(tokenType, matchFound.group(0), currPos))
                    currPos = matchFound.end(0)
                    break
            if not matchFound:
                raise LexicalError(currPos, characters[currPos])
        logging.debug("Lexed %d tokens from %d characters", len(tokenList), len(characters))
        return tokenList

def tokenize(sourceText):
    return Lexer().lex(sourceText)
