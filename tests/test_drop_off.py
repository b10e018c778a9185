# ==============================================
# Tests for DropOffEstimator
# ==============================================

from form_analytics.analysis import DropOffEstimator
from form_analytics.normalization import FieldDefinition, FieldType, FormSchema


def _schema(*fields):
    return FormSchema(id="form-1", fields=list(fields))


def _required(label, field_id=None):
    return FieldDefinition(id=field_id, label=label, type=FieldType.TEXT, required=True)


class TestDropOffEstimator:

    def test_rate_for_missing_field(self, make_submission):
        schema = _schema(_required("Phone", "f_phone"))
        records = [make_submission({"Phone": "555"}) for _ in range(7)]
        records += [make_submission({}) for _ in range(3)]

        points = DropOffEstimator().estimate(schema, records)

        assert len(points) == 1
        assert points[0].field_label == "Phone"
        assert points[0].drop_off_rate == 30.0

    def test_zero_rate_fields_are_excluded(self, make_submission):
        schema = _schema(_required("Phone"), _required("Email"))
        records = [make_submission({"Phone": "555", "Email": "a@b.co"})]
        assert DropOffEstimator().estimate(schema, records) == []

    def test_optional_fields_are_ignored(self, make_submission):
        schema = _schema(FieldDefinition(id="f1", label="Notes", required=False))
        assert DropOffEstimator().estimate(schema, [make_submission({})]) == []

    def test_value_under_id_or_label_counts(self, make_submission):
        schema = _schema(_required("Phone", "f_phone"))
        records = [
            make_submission({"f_phone": "555"}),
            make_submission({"Phone": "556"}),
            make_submission({"phone": "557"}),  # legacy spelling is not checked here
            make_submission({"Phone": ""}),
        ]

        points = DropOffEstimator().estimate(schema, records)

        assert points[0].drop_off_rate == 50.0

    def test_sorted_descending_and_capped(self, make_submission):
        labels = ["A", "B", "C", "D", "E", "F"]
        schema = _schema(*[_required(label) for label in labels])
        # Field at index i is missing from i + 1 of the 10 records
        records = [
            make_submission({label: "x" for idx, label in enumerate(labels) if n > idx})
            for n in range(10)
        ]

        points = DropOffEstimator().estimate(schema, records)

        assert [p.field_label for p in points] == ["F", "E", "D", "C", "B"]
        assert [p.drop_off_rate for p in points] == [60.0, 50.0, 40.0, 30.0, 20.0]

    def test_custom_limit(self, make_submission):
        schema = _schema(_required("A"), _required("B"))
        points = DropOffEstimator(max_points=1).estimate(schema, [make_submission({})])
        assert len(points) == 1

    def test_no_records(self):
        schema = _schema(_required("Phone"))
        assert DropOffEstimator().estimate(schema, []) == []

    def test_rates_within_bounds(self, make_submission):
        schema = _schema(_required("Phone"))
        points = DropOffEstimator().estimate(schema, [make_submission({}) for _ in range(3)])
        assert points[0].drop_off_rate == 100.0
        assert points[0].to_dict() == {"fieldLabel": "Phone", "dropOffRate": 100.0}

    def test_rare_miss_is_kept_even_when_rate_rounds_to_zero(self, make_submission):
        schema = _schema(_required("A"))
        records = [make_submission({"A": "x"}) for _ in range(2000)] + [make_submission({})]

        points = DropOffEstimator().estimate(schema, records)

        assert len(points) == 1
        assert points[0].field_label == "A"
        assert points[0].drop_off_rate == 0.0
