"""Generate synthetic survey submission exports"""
import json
import random
from datetime import datetime, timedelta, timezone
from pathlib import Path

import polars as pl

OUTPUT_DIR = Path("data/sample-inputs")

REGIONS = ["Nairobi", "Mombasa", "Kisumu", "Nakuru", "Eldoret"]
WATER_SOURCES = ["piped", "borehole", "river", "rainwater"]


def _submission(index: int, start: datetime) -> dict:
    """Build one submission, roughly one in ten has a data entry problem"""
    submitted = start + timedelta(hours=index * 3)
    record = {
        "_id": f"uuid:{index:06d}",
        "__system": {"submissionDate": submitted.isoformat()},
        "respondent_name": f"Respondent {index}",
        "region": random.choice(REGIONS),
        "household_size": str(random.randint(1, 12)),
        "water_source": random.choice(WATER_SOURCES),
        "interview_date": submitted.date().isoformat(),
        "status": random.choices(["complete", "incomplete"], weights=[80, 20])[0],
    }

    problem = random.random()
    if problem < 0.04:
        record["household_size"] = random.choice(["five", "n/a", "3 people"])
    elif problem < 0.07:
        record["interview_date"] = random.choice(["yesterday", "32/01/2024", "2024-13-01"])
    elif problem < 0.10:
        record["region"] = ""

    return record


def generate_household_survey(count: int = 250) -> list:
    """Generate household_survey.json as an OData envelope"""
    start = datetime(2024, 3, 1, 8, 0, tzinfo=timezone.utc)
    submissions = [_submission(i, start) for i in range(count)]

    output_path = OUTPUT_DIR / "household_survey.json"
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump({"value": submissions}, f, indent=2)
    print(f"Created: {output_path} ({len(submissions)} submissions)")
    return submissions


def generate_household_survey_csv(submissions: list) -> None:
    """Generate household_survey.csv with flattened system columns"""
    rows = []
    for submission in submissions:
        row = {k: v for k, v in submission.items() if k != "__system"}
        row["__system/submissionDate"] = submission["__system"]["submissionDate"]
        rows.append(row)

    df = pl.DataFrame(rows)
    output_path = OUTPUT_DIR / "household_survey.csv"
    df.write_csv(output_path)
    print(f"Created: {output_path} ({df.height} rows)")


def generate_validation_rules() -> None:
    """Generate validation_rules.json matching the household survey"""
    rules = {
        "requiredFields": ["respondent_name", "region", "household_size"],
        "dataTypes": {
            "household_size": "number",
            "interview_date": "date",
        },
    }

    output_path = OUTPUT_DIR / "validation_rules.json"
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(rules, f, indent=2)
    print(f"Created: {output_path}")


if __name__ == "__main__":
    print("Generating synthetic survey submissions...")
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    submissions = generate_household_survey()
    generate_household_survey_csv(submissions)
    generate_validation_rules()
    print("\nAll test data files generated successfully!")
