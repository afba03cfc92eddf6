"""
Seed demo profiles, patients and payments.

Usage:
  python -m clinic_admin.scripts.seed_payments
"""
import random
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from clinic_admin.core.db import SessionLocal, Base, engine
from clinic_admin.models.patient import Patient, Profile
from clinic_admin.models.payment import Payment

NAMES = [
    "Ani Lestari", "Budi Santoso", "Citra Dewi", "Dedi Kurniawan", "Eka Putri",
    "Fajar Nugroho", "Gita Permata", "Hendra Wijaya", "Indah Sari", "Joko Susilo",
]
METHODS = ["cash", "debit", "credit", "transfer"]

def main():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()

    # If we already have payments, skip
    count = db.query(Payment).count()
    if count >= 10:
        print(f"Already have {count} payments. Skipping seed.")
        db.close()
        return

    now = datetime.now(timezone.utc)
    payments = []
    for name in NAMES:
        profile = Profile(full_name=name)
        patient = Patient(profile=profile)
        db.add(patient)

        for _ in range(random.randint(1, 3)):
            created = now - timedelta(days=random.randint(0, 45), minutes=random.randint(0, 600))
            status = random.choice(["pending", "pending", "completed", "cancelled"])
            payment = Payment(patient=patient, status=status, created_at=created)
            if status == "completed":
                payment.amount = Decimal(random.randrange(50_000, 750_000, 5_000))
                payment.payment_method = random.choice(METHODS)
                payment.paid_at = created + timedelta(hours=1)
            payments.append(payment)

    db.add_all(payments)
    db.commit()
    print(f"Seeded {len(NAMES)} patients and {len(payments)} payments.")
    db.close()

if __name__ == "__main__":
    main()
