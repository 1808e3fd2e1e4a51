"""
Verify a scanned QR code from the command line
"""

import sys
import asyncio
import argparse
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from cardhub.database import connect_db, disconnect_db
from cardhub.dependencies import get_verification_service


async def verify_code(qr_data: str) -> bool:
    """
    Resolve QR text and print who it belongs to

    Returns:
        True when the code verified
    """
    await connect_db()

    try:
        result = await get_verification_service().verify(qr_data)

        if not result.valid:
            print(f"❌ {result.error}")
            return False

        subject = result.subject
        card = subject.credential_info
        print("✅ Verified")
        print(f"   Name: {subject.display_name}")
        print(f"   Type: {subject.subject_type}")
        print(f"   Identifier: {subject.identifier}")
        for key, value in subject.type_specific_info.items():
            print(f"   {key}: {value if value is not None else '-'}")
        print(f"   Card: {card.template_name} (issued {card.issued_at or '-'}, expires {card.expiry_date or '-'})")
        print(f"   Active: {'yes' if card.is_active else 'no'}")
        return True

    finally:
        await disconnect_db()


def main():
    parser = argparse.ArgumentParser(description="Verify ID card QR text")
    parser.add_argument("qr_data", help="Text read from the QR code, e.g. https://school.example/verify/student/STU-001")
    args = parser.parse_args()

    ok = asyncio.run(verify_code(args.qr_data))
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
