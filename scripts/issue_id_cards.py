"""
Bulk-issue ID cards for a class, all teachers or all staff
"""

import sys
import asyncio
import argparse
from datetime import datetime
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from cardhub.database import connect_db, disconnect_db
from cardhub.dependencies import get_id_card_service
from cardhub.exceptions import CardHubError
from cardhub.schemas.id_card import GroupGenerateRequest, GroupTarget


async def issue_id_cards(request: GroupGenerateRequest):
    await connect_db()

    try:
        result = await get_id_card_service().generate_for_group(request)

        print(f"✅ Processed {result.total_processed} users")
        print(f"   Issued: {result.success_count}")
        print(f"   Failed: {result.failure_count}")
        for failure in result.failed:
            print(f"   - {failure.subject_id}: {failure.error}")

    except CardHubError as e:
        print(f"❌ {e.message}")

    finally:
        await disconnect_db()


def main():
    parser = argparse.ArgumentParser(description="Issue ID cards for a group")
    parser.add_argument("template_id", help="ID of an ACTIVE ID card template")
    parser.add_argument("target", choices=[t.value for t in GroupTarget])
    parser.add_argument("--class-id", help="Required when target is 'class'")
    parser.add_argument("--expiry-date", type=datetime.fromisoformat, help="ISO date, defaults to one year from now")
    parser.add_argument("--batch-name")
    args = parser.parse_args()

    print("\n" + "="*60)
    print("ISSUE ID CARDS")
    print("="*60 + "\n")

    request = GroupGenerateRequest(
        template_id=args.template_id,
        target=GroupTarget(args.target),
        class_id=args.class_id,
        expiry_date=args.expiry_date,
        batch_name=args.batch_name,
    )
    asyncio.run(issue_id_cards(request))
    print("\n")


if __name__ == "__main__":
    main()
