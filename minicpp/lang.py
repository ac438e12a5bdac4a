KEYWORDS = (
    "int", "float", "double", "char", "string", "void", "bool",
    "if", "else", "while", "for", "do", "return", "break", "continue",
    "cout", "cin", "endl",
    "class", "struct", "public", "private", "protected",
    "new", "delete", "true", "false",
    "auto", "const", "static", "namespace", "using",
)

# Order matters: the lexer commits to the first pattern that matches.
tokens = [
    {"type": None, "regex": r"//[^\n]*"},
    {"type": None, "regex": r"/\*[\s\S]*?\*/"},
    {"type": "INCLUDE", "regex": r"#include\s*<[^>]+>"},
    {"type": "KEYWORD", "regex": r"\b(?:" + "|".join(KEYWORDS) + r")\b"},
    {"type": "IDENTIFIER", "regex": r"[a-zA-Z_]\w*"},
    {"type": "NUMBER", "regex": r"\d+\.?\d*(?:[eE][+-]?\d+)?"},
    {"type": "CHAR", "regex": r"'(?:[^'\\]|\\.)'"},
    {"type": "STRING", "regex": r'"(?:[^"\\\n]|\\.)*"'},
    {"type": "STREAM", "regex": r"<<|>>"},
    {"type": "OPERATOR", "regex": r"\+\+|--"},
    {"type": "OPERATOR", "regex": r"==|!=|<=|>=|&&|\|\||->|\+=|-=|\*=|/=|%=|\."},
    {"type": "OPERATOR", "regex": r"[+\-*/=<>!%&|~^]"},
    {"type": "SCOPE", "regex": r"::"},
    {"type": "DELIMITER", "regex": r"[\[\](){};,:]"},
    {"type": None, "regex": r"\s+"},
]

# Stripped from the raw source before scanning.
invisibleChars = "\u200b\u200c\u200d\ufeff"

operators = {
    "precedences": {
        "=": 0, "+=": 0, "-=": 0, "*=": 0, "/=": 0, "%=": 0,
        "||": 1,
        "&&": 2,
        "|": 3,
        "^": 4,
        "&": 5,
        "==": 6, "!=": 6,
        "<": 7, "<=": 7, ">": 7, ">=": 7,
        "<<": 8, ">>": 8,
        "+": 9, "-": 9,
        "*": 10, "/": 10, "%": 10,
        ".": 11, "->": 11, "::": 11,
    },
    "assignment": ("=", "+=", "-=", "*=", "/=", "%="),
    "prefix": ("++", "--", "+", "-", "!", "~"),
    "postfix": ("++", "--"),
    "member": (".", "->"),
    "python": {
        "&&": "and",
        "||": "or",
        "!": "not ",
    },
}

datatypes = ("int", "float", "double", "char", "string", "bool", "void")
typeModifiers = ("const", "static")
declarationKeywords = datatypes + typeModifiers + ("auto",)

# Value a declaration without initializer starts out with.
defaultValues = {
    "int": "0",
    "float": "0.0",
    "double": "0.0",
    "char": '""',
    "string": '""',
    "bool": "False",
}

statementParseMap = {
    "{": "parseBlock",
    "if": "parseIf",
    "while": "parseWhile",
    "do": "parseDoWhile",
    "for": "parseFor",
    "return": "parseReturn",
    "break": "parseBreak",
    "continue": "parseContinue",
    "cin": "parseInput",
    "cout": "parsePrint",
    "using": "parseUsing",
}

language = {
    "keywords": KEYWORDS,
    "tokens": tokens,
    "invisibleChars": invisibleChars,
    "operators": operators,
    "datatypes": datatypes,
    "typeModifiers": typeModifiers,
    "declarationKeywords": declarationKeywords,
    "defaultValues": defaultValues,
    "statementParseMap": statementParseMap,
}
