# sample_certificates.py
"""Render certificates with boilerplate data for eyeballing template layouts.

    python sample_certificates.py --template 2.png --name "Jane Smith"
    python sample_certificates.py --count 5
    python sample_certificates.py --all
"""
import argparse
import logging
import random
import time
from datetime import date, timedelta
from pathlib import Path
from types import SimpleNamespace
from typing import List

from certificate_generator import generate_certificate
from file_store import safe_stem
from settings import Settings
from templates import KNOWN_TEMPLATES

TEST_NAMES = [
    "Alice Johnson",
    "Bob Smith",
    "Carol Davis",
    "David Wilson",
    "Eva Brown",
    "Frank Miller",
    "Grace Taylor",
    "Henry Anderson",
]

TEST_COURSES = [
    "Web Development Fundamentals",
    "Advanced JavaScript",
    "React Mastery",
    "Node.js Backend Development",
    "Database Design",
    "UI/UX Design Principles",
    "DevOps Essentials",
    "Mobile App Development",
]

TEST_INSTRUCTORS = [
    "Dr. Sarah Chen",
    "Prof. Michael Rodriguez",
    "Ms. Jennifer Lee",
    "Dr. Robert Thompson",
    "Prof. Lisa Garcia",
    "Mr. Kevin Martinez",
    "Dr. Amanda White",
    "Prof. James Johnson",
]


def generate_test_certificate(settings: Settings, template: str = "1.png", **overrides) -> Path:
    data = {
        "name": "Test User",
        "course": "Sample Course",
        "instructor": "Test Instructor",
        "date": date.today().isoformat(),
    }
    data.update({k: v for k, v in overrides.items() if v})
    certificate = SimpleNamespace(template=template, **data)

    png_bytes = generate_certificate(
        settings.certificates_dir / template, certificate, settings.fonts_dir
    )

    settings.testing_uploads_dir.mkdir(parents=True, exist_ok=True)
    safe_name = safe_stem(certificate.name, "user")
    path = settings.testing_uploads_dir / f"test_certificate_{safe_name}_{int(time.time() * 1000)}.png"
    path.write_bytes(png_bytes)

    logging.info(f"✅ Saved {path} ({len(png_bytes) / 1024:.1f} KB) for {data}")
    return path


def generate_multiple_test_certificates(
    settings: Settings, count: int = 3, template: str = "1.png"
) -> List[Path]:
    generated = []
    for i in range(count):
        random_day = date.today() - timedelta(days=random.randint(0, 365))
        try:
            path = generate_test_certificate(
                settings,
                template,
                name=TEST_NAMES[i % len(TEST_NAMES)],
                course=TEST_COURSES[i % len(TEST_COURSES)],
                instructor=TEST_INSTRUCTORS[i % len(TEST_INSTRUCTORS)],
                date=random_day.isoformat(),
            )
        except Exception as e:
            logging.error(f"❌ Failed to generate certificate {i + 1}: {e}")
            continue
        generated.append(path)

    logging.info(f"Generated {len(generated)} of {count} test certificates")
    return generated


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--template", default="1.png", help="template file in the certificates directory")
    parser.add_argument("--all", action="store_true", help=f"render every bundled template ({', '.join(KNOWN_TEMPLATES)})")
    parser.add_argument("--count", type=int, default=1, help="render N certificates with rotating sample data")
    parser.add_argument("--name")
    parser.add_argument("--course")
    parser.add_argument("--instructor")
    parser.add_argument("--date")
    args = parser.parse_args(argv)

    settings = Settings()
    logging.basicConfig(level=settings.log_level)

    templates = KNOWN_TEMPLATES if args.all else (args.template,)
    paths = []
    for template in templates:
        if args.count > 1:
            paths.extend(generate_multiple_test_certificates(settings, args.count, template))
        else:
            paths.append(
                generate_test_certificate(
                    settings,
                    template,
                    name=args.name,
                    course=args.course,
                    instructor=args.instructor,
                    date=args.date,
                )
            )
    return paths


if __name__ == "__main__":
    main()
