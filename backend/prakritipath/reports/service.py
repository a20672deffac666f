# Lab results are not integrated yet; every patient sees the same sample panel.
MOCK_LAB_REPORTS = [
    {
        "id": 1,
        "test": "Complete Blood Count",
        "date": "2025-01-12",
        "status": "completed",
        "results": {"hemoglobin": "13.8 g/dL", "wbc": "6,400 /uL", "platelets": "250,000 /uL"},
    },
    {
        "id": 2,
        "test": "Lipid Profile",
        "date": "2025-02-03",
        "status": "completed",
        "results": {"total_cholesterol": "182 mg/dL", "hdl": "52 mg/dL", "ldl": "108 mg/dL"},
    },
    {
        "id": 3,
        "test": "Vitamin D (25-OH)",
        "date": "2025-03-20",
        "status": "pending",
        "results": {},
    },
]

def get_lab_reports(user_id: int) -> list[dict]:
    return [{**report, "user_id": user_id} for report in MOCK_LAB_REPORTS]
