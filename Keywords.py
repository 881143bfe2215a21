"""Static identifier tables for the device-script language.

Keys are lower case; the language itself is case-insensitive.
"""
from typing import Dict, List

KEYWORD = "keyword"
TYPE = "type"
BUILTIN = "builtin"
CONSTANT = "constant"

KEYWORDS: Dict[str, str] = {
	# block structure
	"program": KEYWORD,
	"function": KEYWORD,
	"for": KEYWORD,
	"to": KEYWORD,
	"step": KEYWORD,
	"next": KEYWORD,
	"loop": KEYWORD,
	"exit": KEYWORD,
	"if": KEYWORD,
	"then": KEYWORD,
	"else": KEYWORD,
	"end": KEYWORD,
	"declare": KEYWORD,
	"handle": KEYWORD,
	"exercise": KEYWORD,
	"arm": KEYWORD,
	"readout": KEYWORD,
	"device": KEYWORD,
	"return": KEYWORD,
	"and": KEYWORD,
	"or": KEYWORD,
	"not": KEYWORD,
	# declarations
	"numeric": TYPE,
	"string": TYPE,
	"boolean": TYPE,
	"array": TYPE,
	"constant": TYPE,
	# values
	"true": CONSTANT,
	"false": CONSTANT,
	"pi": CONSTANT,
}

HELP: Dict[str, str] = {
	"abs": "abs(x)\nAbsolute value of a numeric expression.",
	"sqrt": "sqrt(x)\nSquare root of a non-negative number.",
	"round": "round(x, digits)\nRound x to the given number of decimal digits.",
	"int": "int(x)\nInteger part of x, truncated toward zero.",
	"len": "len(s)\nNumber of characters in a string or elements in an array.",
	"mid": "mid(s, start, count)\nSubstring of s, start is 1-based.",
	"left": "left(s, count)\nFirst count characters of s.",
	"right": "right(s, count)\nLast count characters of s.",
	"upper": "upper(s)\nCopy of s in upper case.",
	"lower": "lower(s)\nCopy of s in lower case.",
	"trim": "trim(s)\nCopy of s without leading and trailing blanks.",
	"val": "val(s)\nNumeric value of a string, 0 when it is not a number.",
	"str": "str(x)\nString form of a numeric value.",
	"print": "print(value, ...)\nWrite values to the output log.",
	"wait": "wait(ms)\nPause execution for ms milliseconds.",
	"measure": "measure(channel)\nRead the current value of a device channel.",
	"setpoint": "setpoint(channel, value)\nDrive a device channel to value.",
	"timestamp": "timestamp()\nSeconds elapsed since the program started.",
}

for _name in HELP:
	KEYWORDS.setdefault(_name, BUILTIN)


def names_in_category(category: str) -> List[str]:
	return sorted(name for name, kind in KEYWORDS.items() if kind == category)
