"""
Tests for material validation.
"""

from stockmatch.schema import sanitize_candidate, sanitize_material, sanitize_string, validate_material


class TestValidateMaterial:
    """Test validate_material."""

    def test_valid_material(self, valid_material):
        """Valid material should have no errors."""
        assert validate_material(valid_material) == []

    def test_minimal_material(self):
        """Optional fields can be omitted."""
        data = {"name": "Cork", "category": "other", "quantity": 0, "unit": "kg"}
        assert validate_material(data) == []

    def test_missing_name(self, valid_material):
        del valid_material["name"]
        errors = validate_material(valid_material)
        assert any("name" in err.lower() for err in errors)

    def test_blank_name(self, valid_material):
        valid_material["name"] = "   "
        errors = validate_material(valid_material)
        assert errors == ["Material name is required"]

    def test_name_too_short(self, valid_material):
        valid_material["name"] = "A"
        errors = validate_material(valid_material)
        assert any("at least" in err for err in errors)

    def test_name_too_long(self, valid_material):
        valid_material["name"] = "A" * 101
        errors = validate_material(valid_material)
        assert any("less than" in err for err in errors)

    def test_name_invalid_characters(self, valid_material):
        valid_material["name"] = "Oak #4"
        errors = validate_material(valid_material)
        assert errors == ["Material name contains invalid characters"]

    def test_name_markup_stripped_before_check(self, valid_material):
        valid_material["name"] = "<Oak Board>"
        assert validate_material(valid_material) == []

    def test_unknown_category(self, valid_material):
        valid_material["category"] = "stone"
        errors = validate_material(valid_material)
        assert any("category" in err for err in errors)

    def test_quantity_must_be_non_negative_number(self, valid_material):
        for bad in [-1, "3", None, True]:
            valid_material["quantity"] = bad
            errors = validate_material(valid_material)
            assert any("quantity" in err for err in errors), bad

    def test_unknown_unit(self, valid_material):
        valid_material["unit"] = "tons"
        errors = validate_material(valid_material)
        assert any("unit" in err for err in errors)

    def test_optional_field_must_be_string(self, valid_material):
        valid_material["origin"] = 44
        errors = validate_material(valid_material)
        assert errors == ["Field 'origin' must be a string if provided"]

    def test_negative_cost(self, valid_material):
        valid_material["cost_per_unit"] = -2.5
        errors = validate_material(valid_material)
        assert any("cost_per_unit" in err for err in errors)

    def test_quantity_must_be_finite(self, valid_material):
        for bad in [float("nan"), float("inf"), float("-inf")]:
            valid_material["quantity"] = bad
            errors = validate_material(valid_material)
            assert any("quantity" in err for err in errors), bad

    def test_cost_must_be_finite(self, valid_material):
        valid_material["cost_per_unit"] = float("nan")
        errors = validate_material(valid_material)
        assert any("cost_per_unit" in err for err in errors)


class TestSanitize:
    """Test sanitize_string and sanitize_material."""

    def test_sanitize_string(self):
        assert sanitize_string("  <b>Oak</b>  ") == "bOak/b"
        assert sanitize_string("javascript:alert(1)") == "alert(1)"
        assert sanitize_string('x onclick="y"') == 'x "y"'
        assert sanitize_string(None) == ""
        assert len(sanitize_string("a" * 2000)) == 1000

    def test_sanitize_material(self, valid_material):
        valid_material["description"] = "  kiln dried  "
        valid_material["extra"] = "dropped"
        clean = sanitize_material(valid_material)
        assert clean == {
            "name": "Reclaimed Oak",
            "category": "wood",
            "quantity": 2.0,
            "unit": "m³",
            "subcategory": "oak",
            "origin": "UK",
            "description": "kiln dried",
            "cost_per_unit": 410.0,
        }

    def test_sanitize_blank_optional_becomes_none(self):
        clean = sanitize_material({"name": "Cork", "category": "other", "quantity": 1, "unit": "kg", "origin": "  "})
        assert clean["origin"] is None
        assert clean["subcategory"] is None
        assert clean["cost_per_unit"] is None

    def test_sanitize_candidate(self):
        data = {"name": "  Reclaimed Oak  ", "category": ["wood"], "origin": " <UK> ", "quantity": 3}
        clean = sanitize_candidate(data)
        assert clean == {"name": "Reclaimed Oak", "category": ["wood"], "origin": "UK", "quantity": 3}
        assert data["name"] == "  Reclaimed Oak  "

    def test_sanitize_candidate_leaves_non_strings(self):
        clean = sanitize_candidate({"name": 42, "subcategory": None})
        assert clean == {"name": 42, "subcategory": None}
