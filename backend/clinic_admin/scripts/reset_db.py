from clinic_admin.core.db import Base, engine
import clinic_admin.models.patient, clinic_admin.models.payment  # noqa: F401

print("⚙️ Dropping and recreating profiles / patients / payments...")
Base.metadata.drop_all(bind=engine)
Base.metadata.create_all(bind=engine)
print("✅ Database schema refreshed successfully.")
