import unittest

import sys
import os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core.models import FieldSpec, Sense, ShapeDefinition
from core.session import EditorSession

class TestEditorSession(unittest.TestCase):

    def setUp(self):
        self.session = EditorSession(shapes={
            'Giving_shape': ShapeDefinition(fields=[FieldSpec(label='agent', path='http://example.org/onto#agent', required=True)]),
        })
        self.senses = [
            Sense(id='give.v.01', gloss='transfer possession', situations=['Giving_shape']),
            Sense(id='give.v.02', gloss='present', situations=['Giving_shape', 'Performance_shape']),
        ]
        self.session.set_lookup('give', self.senses)

    def test_single_situation_is_selected_automatically(self):
        situations = self.session.select_sense(0)

        self.assertEqual(situations, ['Giving_shape'])
        self.assertEqual(self.session.selected_situation, 'Giving_shape')
        self.assertEqual(self.session.selected_sense.id, 'give.v.01')

    def test_multiple_situations_wait_for_a_choice(self):
        self.session.select_sense(1)
        self.assertIsNone(self.session.selected_situation)

    def test_sense_index_out_of_range(self):
        with self.assertRaises(IndexError):
            self.session.select_sense(5)

    def test_select_situation_returns_fields(self):
        fields = self.session.select_situation('Giving_shape')
        self.assertEqual([f.label for f in fields], ['agent'])
        self.assertEqual(self.session.current_fields(), fields)

        self.assertIsNone(self.session.select_situation('Unknown_shape'))
        self.assertEqual(self.session.current_fields(), [])

    def test_reset_keeps_shapes_and_counter(self):
        self.session.select_sense(0)
        self.assertEqual(self.session.next_subject_id(), 'temp:s1')

        self.session.reset()

        self.assertEqual(self.session.current_verb, '')
        self.assertEqual(self.session.senses, [])
        self.assertIsNone(self.session.selected_sense)
        self.assertIsNone(self.session.selected_situation)
        self.assertIn('Giving_shape', self.session.shapes)
        self.assertEqual(self.session.next_subject_id(), 'temp:s2')

    def test_situation_label(self):
        self.assertEqual(EditorSession.situation_label('Giving_shape'), 'Giving')
        self.assertEqual(EditorSession.situation_label('Change_of_location_shape'), 'Change of location')


if __name__ == '__main__':
    unittest.main()
