"""Tests for MeasureConfig validation and presets."""

import sys
import typing
from pathlib import Path
from typing import Optional

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from footprintlib import ALL_FEATURES, DEFAULT_MAX_COUNT, Feature, MeasureConfig
from footprintlib.core import Introspector, ReflectiveIntrospector


class TestMeasureConfig:

    def test_default_visits_all_leaves(self):
        config = MeasureConfig.default()

        assert config.features == ALL_FEATURES
        assert config.introspector is None
        assert config.max_count == DEFAULT_MAX_COUNT == 2**31 - 1
        assert config.validate() == []

    def test_objects_only(self):
        config = MeasureConfig.objects_only()
        assert config.features == frozenset()
        assert config.validate() == []

    def test_non_positive_max_count(self):
        errors = MeasureConfig(max_count=0).validate()
        assert errors == ["max_count must be positive"]

    def test_non_integer_max_count(self):
        assert MeasureConfig(max_count=1.5).validate() == ["max_count must be an integer"]
        assert MeasureConfig(max_count=True).validate() == ["max_count must be an integer"]

    def test_unknown_feature(self):
        errors = MeasureConfig(features=frozenset({Feature.VISIT_NULL, "visit_all"})).validate()
        assert len(errors) == 1
        assert "unknown features" in errors[0]

    def test_introspector_must_quack(self):
        assert MeasureConfig(introspector=ReflectiveIntrospector()).validate() == []
        errors = MeasureConfig(introspector=object()).validate()
        assert errors == ["introspector must provide children() and scalar_kind_of()"]

    def test_introspector_field_names_introspector(self):
        hints = typing.get_type_hints(MeasureConfig, localns={'Introspector': Introspector})
        assert hints['introspector'] == Optional[Introspector]

    def test_errors_accumulate(self):
        errors = MeasureConfig(max_count=-1, introspector=object()).validate()
        assert len(errors) == 2
