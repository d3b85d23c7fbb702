"""
Tests for the ObjectSelector module.
"""

import logging
import re

import pytest

from sobject_codegen.core.config import ConfigurationError
from sobject_codegen.selector import ObjectSelector, select_objects

CATALOG = frozenset(
    {"Account", "AccountHistory", "Contact", "ContactHistory", "Lead", "Invoice__c"}
)


class TestDefaults:
    """Tests for selection without filters."""

    def test_no_filters_selects_whole_catalog(self):
        """Test that an unconfigured selector returns every name."""
        assert ObjectSelector().select(CATALOG) == CATALOG

    def test_blank_patterns_count_as_unconfigured(self):
        """Test that whitespace-only patterns are ignored."""
        selector = ObjectSelector(include_pattern="  ", exclude_pattern="")

        assert selector.configured is False
        assert selector.select(CATALOG) == CATALOG

    def test_empty_catalog(self):
        """Test selecting from an empty catalog."""
        assert ObjectSelector(includes=["Account"]).select(frozenset()) == frozenset()

    def test_select_all_warns(self, caplog):
        """Test that generating everything is logged as a warning."""
        with caplog.at_level(logging.WARNING, logger="sobject_codegen"):
            ObjectSelector().select(CATALOG)

        assert "all 6 Objects" in caplog.text


class TestIncludes:
    """Tests for include names and patterns."""

    def test_include_names_only(self):
        """Test that named includes select nothing else."""
        assert select_objects(CATALOG, includes=["Account"]) == {"Account"}

    def test_include_names_are_trimmed(self):
        """Test that surrounding whitespace is removed from names."""
        assert select_objects(CATALOG, includes=[" Account ", "Lead\n"]) == {
            "Account",
            "Lead",
        }

    def test_include_name_not_in_catalog(self):
        """Test that unknown names are simply not selected."""
        assert select_objects(CATALOG, includes=["Opportunity"]) == frozenset()

    def test_include_pattern_full_match(self):
        """Test that patterns must match the whole name."""
        assert select_objects(CATALOG, include_pattern="Account") == {"Account"}
        assert select_objects(CATALOG, include_pattern=".*History") == {
            "AccountHistory",
            "ContactHistory",
        }

    def test_include_names_and_pattern_combine(self):
        """Test that names and pattern are alternatives."""
        selected = select_objects(CATALOG, includes=["Lead"], include_pattern=".*__c")

        assert selected == {"Lead", "Invoice__c"}

    def test_excludes_only_keep_default_include(self):
        """Test that excludes alone start from the whole catalog."""
        assert select_objects(CATALOG, excludes=["Lead"]) == CATALOG - {"Lead"}


class TestExcludes:
    """Tests for exclude names and patterns."""

    def test_exclude_pattern(self):
        """Test excluding by pattern."""
        selected = select_objects(CATALOG, exclude_pattern=".*History")

        assert selected == {"Account", "Contact", "Lead", "Invoice__c"}

    def test_exclude_pattern_is_full_match(self):
        """Test that a partial exclude match does not exclude."""
        assert "AccountHistory" in select_objects(CATALOG, exclude_pattern="History")

    def test_exclude_name_overrides_include_name(self):
        """Test that a name both included and excluded is not selected."""
        selected = select_objects(CATALOG, includes=["Account", "Lead"], excludes=["Lead"])

        assert selected == {"Account"}

    def test_exclude_pattern_overrides_include_name(self):
        """Test that the exclude pattern also applies to explicit includes."""
        selected = select_objects(
            CATALOG, includes=["Account", "AccountHistory"], exclude_pattern=".*History"
        )

        assert selected == {"Account"}


class TestSelectionRule:
    """Tests checking every name against the membership rule."""

    @pytest.mark.parametrize(
        "includes,excludes,include_pattern,exclude_pattern",
        [
            (["Account"], [], None, None),
            ([], ["Contact"], "Co.*", None),
            (["Lead"], ["Account"], "Acc.*", ".*History"),
            ([], [], None, "Lead|Invoice__c"),
            (["Contact", "Lead"], ["Lead"], ".*__c", "Contact"),
        ],
    )
    def test_membership_rule(self, includes, excludes, include_pattern, exclude_pattern):
        """Test selected(name) == included and not excluded."""
        selected = select_objects(CATALOG, includes, excludes, include_pattern, exclude_pattern)

        for name in CATALOG:
            pi = re.fullmatch(include_pattern, name) if include_pattern else None
            px = re.fullmatch(exclude_pattern, name) if exclude_pattern else None
            included = name in includes or pi is not None or (
                not includes and not include_pattern
            )
            excluded = name in excludes or px is not None
            assert (name in selected) == (included and not excluded), name


class TestErrors:
    """Tests for invalid selector configuration."""

    @pytest.mark.parametrize("kind", ["includes", "excludes"])
    def test_empty_name(self, kind):
        """Test that empty names raise ConfigurationError."""
        with pytest.raises(ConfigurationError) as exc_info:
            ObjectSelector(**{kind: ["Account", "   "]})

        assert kind in str(exc_info.value)

    def test_invalid_regex(self):
        """Test that an invalid pattern raises ConfigurationError."""
        with pytest.raises(ConfigurationError):
            ObjectSelector(include_pattern="(unclosed")
