"""
test ini/parser.py and ini/model.py
"""

import pytest

from pywinini.ini import (
    IniFile, IniParseError, IniProperty, IniSection, IniTrivia,
    LineTerminator, TriviaKind, dumps, loads
)

ROUND_TRIP_TEXTS = [
    '',
    '\r\n',
    ';only a comment',
    'a=1',
    'a=1\r\n[s]\r\nb=2\r\n',
    'a = 1 \n[ s ]\n k = v\n',
    '  [indented]\t\r\nk=v\r\n',
    'a=1\rb=2\nc=3\r\n',
    '[s]\r\n;c\r\n\r\n',
    '[s]\r\nk=v\r\n\x1a',
    'k=a=b\n=empty key\nk2=\n',
    ';head\r\n\r\ntop=1\r\n\r\n[one]\r\n; about x\r\nx=1\r\n  \r\n'
    '[two.three]\nkey=val\n;tail\n\n',
]


@pytest.mark.parametrize('text', ROUND_TRIP_TEXTS)
def test_round_trip(text):
    assert dumps(loads(text)) == text


def test_structure():
    doc = loads(';c\r\na=1\r\n[s]\r\nb=2\r\n;tail\r\n')
    assert [i.key for i in doc.properties] == ['a']
    assert doc.properties[0].leading_trivia == [
        IniTrivia(TriviaKind.COMMENT, ';c', LineTerminator.CRLF)]
    assert [i.name for i in doc.sections] == ['s']
    assert doc.sections[0].properties[0] == IniProperty(
        'b', '2', LineTerminator.CRLF)
    assert doc.eof_trivia == [
        IniTrivia(TriviaKind.COMMENT, ';tail', LineTerminator.CRLF)]
    assert doc.eof_lexeme == ''


def test_property_keeps_spaces():
    prop = loads(' k = v \n').properties[0]
    assert prop.key == ' k '
    assert prop.value == ' v '


def test_value_may_contain_equals():
    prop = loads('k=a=b\n').properties[0]
    assert (prop.key, prop.value) == ('k', 'a=b')


def test_section_name_may_contain_dots():
    assert loads('[a.b.c]\n').sections[0].name == 'a.b.c'


def test_unclosed_section_is_error():
    with pytest.raises(IniParseError) as e:
        loads('[bad\r\n')
    assert e.value.lineno == 1
    assert e.value.lexeme == '[bad'


def test_bare_line_is_error():
    with pytest.raises(IniParseError) as e:
        loads('a=1\nnot a pair\nb=2\n')
    assert e.value.lineno == 2


def test_parse_error_is_value_error():
    with pytest.raises(ValueError):
        loads('[s] trailing\n')


@pytest.mark.parametrize('text, expected', [
    ('a=1\nb=2\n', LineTerminator.LF),
    ('a=1\r\nb=2\n', LineTerminator.LF),
    ('a=1\rb=2\r\n', LineTerminator.CRLF),
    ('[s]\r', LineTerminator.CR),
    ('a=1', LineTerminator.CRLF),
    (';comments do not count\n', LineTerminator.CRLF),
    ('', LineTerminator.CRLF),
])
def test_default_line_terminator(text, expected):
    assert loads(text).default_line_terminator == expected


def test_duplicate_sections_kept_apart():
    with pytest.warns(UserWarning):
        doc = loads('[s]\na=1\n[s]\nb=2\n')
    assert len(doc.sections) == 2
    assert [len(i) for i in doc.find_sections('s')] == [1, 1]
    assert doc.find_section('s') is doc.sections[0]


def test_default_terminator_resolved_when_dumping():
    doc = IniFile(default_line_terminator=LineTerminator.LF)
    doc.properties.append(IniProperty('a', '1'))
    doc.add_section('s').properties.append(IniProperty('b', '2'))
    assert dumps(doc) == 'a=1\n[s]\nb=2\n'
    doc.default_line_terminator = LineTerminator.CRLF
    assert dumps(doc) == 'a=1\r\n[s]\r\nb=2\r\n'


def test_explicit_terminator_wins_over_default():
    doc = loads('a=1\r\nb=2\n')
    doc.default_line_terminator = LineTerminator.CR
    assert dumps(doc) == 'a=1\r\nb=2\n'


def test_default_terminator_may_not_be_none():
    with pytest.raises(ValueError):
        IniFile(default_line_terminator=LineTerminator.NONE)
    doc = IniFile()
    with pytest.raises(ValueError):
        doc.default_line_terminator = LineTerminator.NONE


def test_section_name_with_bracket():
    with pytest.raises(ValueError):
        IniSection('a]b')


def test_parsed_nodes_start_without_trailing_trivia():
    doc = loads(';c\na=1\n[s]\nb=2\n')
    nodes = [doc.properties[0], doc.sections[0], doc.sections[0].properties[0]]
    assert all(i.trailing_trivia == [] for i in nodes)
    assert len({id(i.trailing_trivia) for i in nodes}) == 3


def test_section_header_keeps_blanks():
    sect = loads('  [s]\t\n').sections[0]
    assert sect.name == 's'
    assert sect.header == '  [s]\t'
    assert str(sect) == '[s]'
