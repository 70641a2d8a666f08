import os
import sys


# Put `src/backend` on sys.path so `import api...` and `import scripts...` work when running this folder alone.
BACKEND_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "../.."))
if BACKEND_DIR not in sys.path:
    sys.path.insert(0, BACKEND_DIR)

import pytest


@pytest.fixture
def documents():
    return [
        {
            "fileNo": "GWD/1/2024",
            "applicantName": "A. Nair",
            "applicationType": "Private_Irrigation",
            "siteDetails": [
                {"nameOfSite": "East", "purpose": "BWC", "diameter": "150 mm (6”)", "workStatus": "Work in Progress"}
            ],
            "remittanceDetails": [
                {"amountRemitted": "5000", "dateOfRemittance": "2024-04-10", "remittedAccount": "RevenueHead"},
                {"amountRemitted": "3000", "dateOfRemittance": "2024-05-10", "remittedAccount": "RevenueHead"},
                {"amountRemitted": "1000", "dateOfRemittance": "2024-05-11", "remittedAccount": "SBI"},
            ],
        }
    ]
