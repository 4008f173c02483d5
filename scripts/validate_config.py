# scripts/validate_config.py
import argparse
import json
import sys

import yaml
from jsonschema import Draft202012Validator

from strintern.config import InternSettings


def validate_yaml(path="experiments/experiment.yaml"):
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    InternSettings.from_mapping(data.get("intern"))
    print(f"✅ {path} is valid YAML with a valid intern section")
    return data


def validate_schema(path="schema/result.schema.json"):
    with open(path, "r", encoding="utf-8") as f:
        schema = json.load(f)
    Draft202012Validator.check_schema(schema)
    print(f"✅ {path} is a valid JSON Schema")
    return schema


def validate_result(result, schema):
    """Return the list of schema errors for one result dict (empty when valid)."""
    validator = Draft202012Validator(schema)
    return sorted(validator.iter_errors(result), key=lambda e: list(e.path))


if __name__ == "__main__":
    ap = argparse.ArgumentParser(description="Validate an experiment config and the result schema")
    ap.add_argument("--config", default="experiments/experiment.yaml")
    ap.add_argument("--schema", default="schema/result.schema.json")
    ap.add_argument("--result", help="Optional result JSON to validate against the schema")
    args = ap.parse_args()

    cfg = validate_yaml(args.config)
    schema = validate_schema(args.schema)
    if args.result:
        with open(args.result, "r", encoding="utf-8") as f:
            errors = validate_result(json.load(f), schema)
        for err in errors:
            print(f"❌ {'.'.join(str(p) for p in err.path)}: {err.message}", file=sys.stderr)
        if errors:
            sys.exit(1)
        print(f"✅ {args.result} matches the result schema")
    print("\n--- config content ---")
    print(cfg)
