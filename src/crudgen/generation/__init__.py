# src/crudgen/generation/__init__.py
"""Test-suite generation pipeline module."""

from crudgen.generation.attributes import AttributeSet, sample_value, synthesize_attributes
from crudgen.generation.cases import CaseKind, CrudCase, SuiteCase, UniqueCase, ValidationCase
from crudgen.generation.orchestrator import ModelTestGenerator
from crudgen.generation.output import OutputStore
from crudgen.generation.renderer import PytestRenderer
from crudgen.generation.rules import (
    RULE_REGISTRY,
    InvalidRuleParameter,
    Rule,
    RuleSpec,
    parse_rules,
    register_rule,
)
from crudgen.generation.suite import SuiteBuilder, SuiteDocument, updated_value
from crudgen.generation.templates import CodeTemplate, python_literal
from crudgen.generation.validation import generate_validation_cases

__all__ = [
    # Attribute Synthesizer
    "AttributeSet",
    "sample_value",
    "synthesize_attributes",
    # Case nodes
    "CaseKind",
    "CrudCase",
    "SuiteCase",
    "UniqueCase",
    "ValidationCase",
    # Rules
    "RULE_REGISTRY",
    "InvalidRuleParameter",
    "Rule",
    "RuleSpec",
    "parse_rules",
    "register_rule",
    # Validation Generator
    "generate_validation_cases",
    # Composition and rendering
    "CodeTemplate",
    "PytestRenderer",
    "SuiteBuilder",
    "SuiteDocument",
    "python_literal",
    "updated_value",
    # Pipeline
    "ModelTestGenerator",
    "OutputStore",
]
