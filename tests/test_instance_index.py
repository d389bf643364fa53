import unittest

import sys
import os
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from core.instance_index import scan_instances
from core.vocabulary import prefix_block

BUFFER = prefix_block() + '''temp:s1 a :Giving ;
    rdfs:label "give" ;
    :lemma "give" ;
    :agent temp:Alice .
temp:Alice a :Entity ;
    rdfs:label "Alice" .

temp:s2 a :Selling ;
    rdfs:label "sell" .
ex:outside a :Giving ;
    rdfs:label "external" .
temp:s3 a :Giving ;
    :lemma "unlabelled" .
temp:s4 a :Giving ;
    :theme "x" .
temp:s5 a :Giving ; rdfs:label "inline" .
'''

class TestScanInstances(unittest.TestCase):

    def test_finds_labelled_situation_instances_in_order(self):
        instances = scan_instances(BUFFER)

        self.assertEqual([i.id for i in instances], ['temp:s1', 'temp:s2', 'temp:s5'])
        self.assertEqual(instances[0].class_name, 'Giving')
        self.assertEqual(instances[0].label, 'give')
        self.assertEqual(instances[1].display, 'sell (Selling)')
        self.assertEqual(instances[2].label, 'inline')

    def test_label_must_belong_to_the_same_block(self):
        text = 'temp:s1 a :Giving ;\n    :lemma "give" .\ntemp:Bob a :Entity ;\n    rdfs:label "Bob" .\n'
        self.assertEqual(scan_instances(text), [])

    def test_is_restartable(self):
        self.assertEqual(scan_instances(BUFFER), scan_instances(BUFFER))

    def test_empty_buffer(self):
        self.assertEqual(scan_instances(prefix_block()), [])


if __name__ == '__main__':
    unittest.main()
