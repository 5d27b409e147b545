"""
Severe Hyperkalemia in ESRD.

Dialysis patient who missed a session: bradycardic with potassium close
to the arrest threshold.
"""

from nephrosim.core.state import Intervention, Parameter, PatientInfo, Scenario


def create_hyperkalemia_esrd() -> Scenario:
    """Create the hyperkalemia / ESRD case."""
    clinical = {
        "Heart Rate": Parameter(50, "bpm", (60, 100), -0.1),
        "Blood Pressure Systolic": Parameter(150, "mmHg", (90, 120), 0),
        "Respiratory Rate": Parameter(18, "breaths/min", (12, 20), 0),
        "Temperature": Parameter(37.0, "°C", (36.5, 37.5), 0),
        "Urine Output": Parameter(0, "ml/hr", (30, 100), 0),
    }
    labs = {
        "Creatinine": Parameter(8.9, "mg/dL", (0.6, 1.2), 0.01),
        "Potassium (K+)": Parameter(7.8, "mEq/L", (3.5, 5.0), 0.005),
        "Sodium (Na+)": Parameter(140, "mEq/L", (135, 145), 0),
        "Bicarbonate (HCO3)": Parameter(15, "mEq/L", (22, 28), -0.01),
        "Calcium": Parameter(8.0, "mg/dL", (8.5, 10.2), -0.005),
    }
    interventions = (
        Intervention("calcium-gluconate", "IV Calcium Gluconate", 100,
                     "Stabilizes cardiac membrane.", {"Heart Rate": 5}),
        Intervention("insulin-dextrose", "IV Insulin & Dextrose", 350,
                     "Shifts potassium into cells.", {"Potassium (K+)": -0.8}),
        Intervention("albuterol", "Nebulized Albuterol", 50,
                     "Aids in shifting potassium intracellularly.",
                     {"Potassium (K+)": -0.3, "Heart Rate": 10}),
        Intervention("kayexalate", "Kayexalate (SPS)", 80,
                     "Removes potassium via the GI tract. Slow acting.", {}),
        Intervention("dialysis-urgent", "Urgent Hemodialysis", 2500,
                     "Definitive treatment for hyperkalemia.",
                     {"Creatinine": -2.0, "Potassium (K+)": -2.5, "Bicarbonate (HCO3)": 5}),
    )

    return Scenario(
        id="hyperkalemia-esrd",
        title="Severe Hyperkalemia in ESRD",
        description=(
            "A 55-year-old female with End-Stage Renal Disease (ESRD) on "
            "hemodialysis presents with weakness after missing a dialysis session."
        ),
        patient=PatientInfo(
            name="Jane Smith",
            age=55,
            sex="Female",
            history=(
                "ESRD due to polycystic kidney disease, on hemodialysis 3x/week. "
                "Missed yesterday's session."
            ),
        ),
        initial_budget=3000,
        time_limit=300,  # 5 minutes
        initial_clinical_params=clinical,
        initial_lab_params=labs,
        available_interventions=interventions,
    )
