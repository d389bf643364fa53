import unittest

import sys
import os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core.turtle_lexer import TokenKind, tokenize_line

class TestTokenizeLine(unittest.TestCase):

    def texts(self, line):
        return [token.text for token in tokenize_line(line)]

    def test_subject_declaration(self):
        tokens = tokenize_line('temp:s1 a :Giving ;')
        self.assertEqual([t.text for t in tokens], ['temp:s1', 'a', ':Giving', ';'])
        self.assertEqual([t.kind for t in tokens], [TokenKind.NAME, TokenKind.NAME, TokenKind.NAME, TokenKind.PUNCT])

    def test_terminator_glued_to_name_is_split_off(self):
        self.assertEqual(self.texts(':agent temp:Bob.'), [':agent', 'temp:Bob', '.'])

    def test_punctuation_inside_literal_is_kept(self):
        tokens = tokenize_line('"a; b." .')
        self.assertEqual(tokens[0].kind, TokenKind.LITERAL)
        self.assertEqual(tokens[0].value, 'a; b.')
        self.assertTrue(tokens[1].is_punct('.'))
        self.assertEqual(len(tokens), 2)

    def test_escaped_quotes_are_unescaped(self):
        tokens = tokenize_line(r':said "say \"hi\"" ;')
        self.assertEqual(tokens[1].value, 'say "hi"')
        self.assertTrue(tokens[2].is_punct(';'))

    def test_language_tag_and_datatype_stay_on_raw_text(self):
        tagged = tokenize_line('"chat"@fr ;')[0]
        self.assertEqual(tagged.text, '"chat"@fr')
        self.assertEqual(tagged.value, 'chat')

        typed = tokenize_line('"5"^^xsd:integer.')
        self.assertEqual(typed[0].text, '"5"^^xsd:integer')
        self.assertTrue(typed[1].is_punct('.'))

    def test_iri_and_blank_node(self):
        tokens = tokenize_line('_:b1 <http://example.org/onto#agent> <http://example.org/Bob> ;')
        self.assertEqual([t.kind for t in tokens[:3]], [TokenKind.BNODE, TokenKind.IRI, TokenKind.IRI])
        self.assertEqual(tokens[1].text, '<http://example.org/onto#agent>')

    def test_comment_ends_the_line(self):
        self.assertEqual(self.texts('_:b1 :p "x" # trailing note'), ['_:b1', ':p', '"x"'])

    def test_directives(self):
        self.assertEqual(tokenize_line('@prefix temp: <https://example.org/temp/> .')[0].kind, TokenKind.DIRECTIVE)
        self.assertEqual(tokenize_line('PREFIX ex: <https://example.org/>')[0].kind, TokenKind.DIRECTIVE)

    def test_unterminated_literal_takes_rest_of_line(self):
        tokens = tokenize_line('"unterminated ; value')
        self.assertEqual(len(tokens), 1)
        self.assertEqual(tokens[0].value, 'unterminated ; value')

    def test_decimal_keeps_inner_dot(self):
        self.assertEqual(self.texts('3.14 .'), ['3.14', '.'])

    def test_anonymous_block_brackets(self):
        self.assertEqual(self.texts('[ a :X ] .'), ['[', 'a', ':X', ']', '.'])

    def test_empty_line(self):
        self.assertEqual(tokenize_line(''), [])


if __name__ == '__main__':
    unittest.main()
