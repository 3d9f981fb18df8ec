from __future__ import annotations

import random
from datetime import date

from faker import Faker


TAGS = ["python", "react", "cloud", "data", "design", "testing", "devops", "api"]


def _faker(seed: int) -> Faker:
    # Own instance per call: loads run on worker threads.
    fake = Faker()
    fake.seed_instance(seed)
    return fake


def _years(n: int, rng: random.Random, until: int | None = None) -> list[tuple[str, str]]:
    # Consecutive, most recent first; open-ended unless `until` is given
    end = until or date.today().year
    spans = []
    for _ in range(n):
        start = end - rng.randint(1, 3)
        spans.append((str(start), str(end)))
        end = start
    if until is None and spans:
        spans[0] = (spans[0][0], "Present")
    return spans


def projects_sample(n: int = 6) -> list[dict]:
    fake = _faker(11)
    rng = random.Random(11)
    rows = []
    for i in range(n):
        title = fake.catch_phrase()
        slug = fake.slug(title) or f"project-{i}"
        rows.append(
            {
                "slug": slug,
                "title": title,
                "summary": fake.sentence(nb_words=16),
                "demo_url": f"https://{slug}.example.com" if rng.random() < 0.7 else None,
                "repo_url": f"https://github.com/example/{slug}" if rng.random() < 0.8 else None,
            }
        )
    return rows


def experience_sample(n: int = 3) -> list[dict]:
    fake = _faker(13)
    rng = random.Random(13)
    return [
        {
            "id": f"xp-{i}",
            "start": start,
            "end": end,
            "role": fake.job(),
            "org": fake.company(),
            "summary": fake.sentence(nb_words=14),
        }
        for i, (start, end) in enumerate(_years(n, rng))
    ]


def education_sample(n: int = 2) -> list[dict]:
    fake = _faker(17)
    rng = random.Random(17)
    degrees = ["BSc Computer Science", "MSc Software Engineering", "BEng Electrical Engineering"]
    return [
        {
            "id": f"edu-{i}",
            "start": start,
            "end": end,
            "degree": rng.choice(degrees),
            "school": f"University of {fake.city()}",
            "summary": fake.sentence(nb_words=12),
        }
        for i, (start, end) in enumerate(_years(n, rng, until=date.today().year - 4))
    ]


def posts_sample(n: int = 3) -> list[dict]:
    fake = _faker(19)
    rng = random.Random(19)
    return [
        {
            "id": f"post-{i}",
            "title": fake.sentence(nb_words=6).rstrip("."),
            "excerpt": fake.paragraph(nb_sentences=3),
            "read_time": rng.randint(3, 12),
            "tags": rng.sample(TAGS, k=3),
        }
        for i in range(n)
    ]


SAMPLES = {
    "projects": projects_sample,
    "experience": experience_sample,
    "education": education_sample,
    "posts": posts_sample,
}
