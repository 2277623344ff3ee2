import json
import unittest
from unittest.mock import patch

from jsonfilter_data_model.filter import Filter, GreaterThan, LessOrEqual, Equals, NotEqual, StartsWith, \
    ArrayContains, HasKey, And, Or, operator_from_dict
from jsonfilter_exception_model.exception import InvalidFilterException, FilterDepthExceededException


class TestFilterSerialization(unittest.TestCase):
    def setUp(self):
        self.filter = Filter.new(".", And([
            Filter.new("age", GreaterThan(20)),
            Filter.new("user", HasKey("id")),
            Filter.new(".", Or([
                Filter.new("tags", ArrayContains({"name": "json"})),
                Filter.new("name", StartsWith("John")),
                Filter.new("deleted", NotEqual(True)),
            ])),
        ]))

    def test_tagged_representation(self):
        """Variant name is the key, operand the value."""
        self.assertEqual(
            Filter.new("age", GreaterThan(20)).to_dict(),
            {"path": "age", "operator": {"GreaterThan": 20.0}}
        )
        self.assertEqual(
            Filter.new(".", And([Filter.new("tags[1]", Equals("b"))])).to_dict(),
            {"path": ".", "operator": {"And": [{"path": "tags[1]", "operator": {"Equals": "b"}}]}}
        )

    def test_dict_round_trip(self):
        self.assertEqual(Filter.from_dict(self.filter.to_dict()), self.filter)

    def test_json_round_trip_keeps_behaviour(self):
        restored = Filter.from_json(self.filter.to_json(indent=2))
        self.assertEqual(restored, self.filter)

        document = {"age": 30, "user": {"id": 1}, "tags": [], "name": "Jane", "deleted": False}
        self.assertEqual(restored.check(document), self.filter.check(document))
        self.assertTrue(restored.check(document))

    def test_decode_original_wire_format(self):
        text = json.dumps({
            "path": ".",
            "operator": {"Or": [
                {"path": "age", "operator": {"LessOrEqual": 18}},
                {"path": "name", "operator": {"StartsWith": "Jo"}}
            ]}
        })
        self.assertEqual(Filter.from_json(text), Filter.new(".", Or([
            Filter.new("age", LessOrEqual(18.0)),
            Filter.new("name", StartsWith("Jo")),
        ])))

    def test_unknown_variant(self):
        with self.assertRaises(InvalidFilterException):
            operator_from_dict({"Matches": ".*"})

    def test_operator_needs_exactly_one_tag(self):
        with self.assertRaises(InvalidFilterException):
            operator_from_dict({})
        with self.assertRaises(InvalidFilterException):
            operator_from_dict({"Equals": 1, "HasKey": "a"})
        with self.assertRaises(InvalidFilterException):
            operator_from_dict("Equals")

    def test_wrong_operand_shape(self):
        for data in [{"GreaterThan": "20"}, {"HasKey": 1}, {"And": {"path": "a"}}, {"Or": [1]}]:
            with self.subTest(data=data):
                with self.assertRaises(InvalidFilterException):
                    operator_from_dict(data)

    def test_missing_fields(self):
        with self.assertRaises(InvalidFilterException):
            Filter.from_dict({"path": "a"})
        with self.assertRaises(InvalidFilterException):
            Filter.from_dict({"operator": {"Equals": 1}})
        with self.assertRaises(InvalidFilterException):
            Filter.from_dict({"path": 3, "operator": {"Equals": 1}})

    def test_invalid_json(self):
        with self.assertRaises(InvalidFilterException):
            Filter.from_json("{not json")

    def test_decode_numeric_operand_beyond_double_range(self):
        text = '{"path": "a", "operator": {"GreaterThan": 1' + "0" * 400 + '}}'
        filter_ = Filter.from_json(text)
        self.assertEqual(filter_, Filter.new("a", GreaterThan(float("inf"))))
        self.assertFalse(filter_.check({"a": 10 ** 300}))

    def test_decode_depth_limit(self):
        data = {"path": "x", "operator": {"Equals": 1}}
        for _ in range(5):
            data = {"path": ".", "operator": {"And": [data]}}

        with patch("jsonfilter_data_model.filter.settings") as mock_settings:
            mock_settings.max_filter_depth = 4
            with self.assertRaises(FilterDepthExceededException):
                Filter.from_dict(data)
            mock_settings.max_filter_depth = 5
            self.assertIsInstance(Filter.from_dict(data), Filter)


if __name__ == '__main__':
    unittest.main()
