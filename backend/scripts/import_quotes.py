"""
Import The Office transcript lines from TSV into characters, quotes,
conversations and episodes.

Each (season, episode) becomes an Episode, each scene inside it a
Conversation, and each line a Quote attributed to its speaker's Character.
Episodes already in the database (same season and number) are skipped, so the
script is safe to run multiple times.

Data source: backend/data/office_lines.tsv
Format: season<TAB>episode<TAB>scene<TAB>speaker<TAB>line_text
        (optional columns: title, deleted)

Usage:
    python scripts/import_quotes.py [path/to/lines.tsv]
"""

import csv
import os
import sys
from pathlib import Path

# Add parent directory to path to import app modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.database import SessionLocal
from app.models.models import Character, Conversation, ConversationQuote, Episode, Quote

# Path to TSV file (relative to backend directory)
DATA_FILE = Path(__file__).parent.parent / "data" / "office_lines.tsv"

REQUIRED_COLUMNS = {"season", "episode", "scene", "speaker", "line_text"}
TRUE_VALUES = {"true", "1", "yes"}


def normalize_speaker_name(raw_name: str) -> str:
    """
    Collapse internal whitespace and strip the ends.

    Case is kept as written: transcripts spell names like "DeAngelo" on purpose.

    Examples:
        "  Michael " -> "Michael"
        "Jim  Halpert" -> "Jim Halpert"
    """
    return " ".join(raw_name.split())


def read_tsv_data(file_path: Path) -> list[dict]:
    """
    Read and parse the TSV file.

    Args:
        file_path: Path to the TSV file

    Returns:
        List of dicts with keys: season, episode, scene, speaker, text, title

    Raises:
        FileNotFoundError: If TSV file doesn't exist
        ValueError: If required columns are missing
    """
    if not file_path.exists():
        raise FileNotFoundError(f"TSV file not found: {file_path}")

    records = []

    with open(file_path, "r", encoding="utf-8") as f:
        reader = csv.DictReader(f, delimiter="\t")

        if not REQUIRED_COLUMNS.issubset(set(reader.fieldnames or [])):
            raise ValueError(
                f"TSV missing required columns. "
                f"Expected: {REQUIRED_COLUMNS}, Got: {reader.fieldnames}"
            )

        # Header is line 1
        for line_number, row in enumerate(reader, start=2):
            if (row.get("deleted") or "").strip().lower() in TRUE_VALUES:
                continue
            try:
                speaker = normalize_speaker_name(row["speaker"] or "")
                text = (row["line_text"] or "").strip()
                if not speaker or not text:
                    raise ValueError("empty speaker or line")

                records.append(
                    {
                        "season": int(row["season"]),
                        "episode": int(row["episode"]),
                        "scene": int(row["scene"]),
                        "speaker": speaker,
                        "text": text,
                        "title": (row.get("title") or "").strip() or None,
                    }
                )
            except (ValueError, TypeError) as e:
                print(f"  Warning: Skipping line {line_number}: {e}")
                continue

    return records


def group_by_episode(records: list[dict]) -> dict:
    """
    Group lines into episodes and scenes, keeping file order.

    Returns:
        {(season, episode): {"name": str, "scenes": {scene: [record, ...]}}}
    """
    episodes = {}
    for record in records:
        key = (record["season"], record["episode"])
        episode = episodes.setdefault(
            key,
            {"name": record["title"] or f"S{key[0]:02d}E{key[1]:02d}", "scenes": {}},
        )
        if record["title"] and episode["name"] != record["title"]:
            episode["name"] = record["title"]
        episode["scenes"].setdefault(record["scene"], []).append(record)
    return episodes


def import_records(db, records: list[dict]) -> tuple[int, int]:
    """
    Create episodes, conversations, quotes and characters for the records.

    Args:
        db: Database session
        records: Parsed TSV records

    Returns:
        (imported_episodes, skipped_episodes) tuple
    """
    characters = {c.name: c for c in db.query(Character).all()}
    imported = 0
    skipped = 0

    for (season, number), data in group_by_episode(records).items():
        existing = (
            db.query(Episode)
            .filter(Episode.season == season, Episode.number == number)
            .first()
        )
        if existing:
            skipped += 1
            continue

        episode = Episode(name=data["name"], season=season, number=number)
        db.add(episode)

        for scene in data["scenes"].values():
            conversation = Conversation()
            for position, record in enumerate(scene):
                character = characters.get(record["speaker"])
                if character is None:
                    character = Character(name=record["speaker"])
                    db.add(character)
                    characters[record["speaker"]] = character

                quote = Quote(character=character, text=record["text"])
                conversation.lines.append(ConversationQuote(quote=quote, position=position))
            episode.conversations.append(conversation)

        # Flush per episode to keep the unit of work small
        db.flush()
        imported += 1

    db.commit()
    return imported, skipped


def get_stats(db) -> dict:
    return {
        "episodes": db.query(Episode).count(),
        "conversations": db.query(Conversation).count(),
        "quotes": db.query(Quote).count(),
        "characters": db.query(Character).count(),
    }


def import_quotes(data_file: Path = DATA_FILE):
    """
    Main import function.

    Reads TSV file, parses data, and imports into database.
    Idempotent - safe to run multiple times.
    """
    print("=" * 60)
    print("The Office Quotes Import")
    print("=" * 60)

    print(f"\nData file: {data_file}")
    if not data_file.exists():
        print(f"ERROR: Data file not found: {data_file}")
        sys.exit(1)

    print("\nStep 1: Reading TSV file...")
    try:
        records = read_tsv_data(data_file)
        print(f"  Parsed {len(records)} lines")
    except (OSError, ValueError) as e:
        print(f"ERROR: Failed to read TSV: {e}")
        sys.exit(1)

    if not records:
        print("WARNING: No valid lines found in TSV file.")
        sys.exit(0)

    print("\nStep 2: Importing to database...")
    db = SessionLocal()
    try:
        imported, skipped = import_records(db, records)
        print(f"  Imported episodes: {imported}, already present: {skipped}")

        stats = get_stats(db)
        print("\nStep 3: Verifying import...")
        for name, count in stats.items():
            print(f"  {name}: {count}")

        print("\n" + "=" * 60)
        print("Import completed successfully!")
        print("=" * 60)
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    import_quotes(Path(sys.argv[1]) if len(sys.argv) > 1 else DATA_FILE)
