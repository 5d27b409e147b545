"""
Acute Kidney Injury secondary to Sepsis.

Septic patient with falling blood pressure, oliguria, rising creatinine
and mild hyperkalemia. Teaches volume resuscitation, pressor support and
when to escalate to dialysis.
"""

from nephrosim.core.state import Intervention, Parameter, PatientInfo, Scenario


def create_aki_sepsis() -> Scenario:
    """Create the AKI / sepsis case."""
    clinical = {
        "Heart Rate": Parameter(120, "bpm", (60, 100), 0.1),
        "Blood Pressure Systolic": Parameter(85, "mmHg", (90, 120), -0.2),
        "Respiratory Rate": Parameter(24, "breaths/min", (12, 20), 0.05),
        "Temperature": Parameter(39.1, "°C", (36.5, 37.5), 0),
        "Urine Output": Parameter(15, "ml/hr", (30, 100), -0.1),
    }
    labs = {
        "Creatinine": Parameter(2.5, "mg/dL", (0.6, 1.2), 0.005),
        "Potassium (K+)": Parameter(5.2, "mEq/L", (3.5, 5.0), 0.002),
        "Sodium (Na+)": Parameter(135, "mEq/L", (135, 145), 0),
        "Bicarbonate (HCO3)": Parameter(18, "mEq/L", (22, 28), -0.01),
        "Lactate": Parameter(4.0, "mmol/L", (0.5, 1.0), 0.01),
    }
    interventions = (
        Intervention(
            id="ivf-bolus",
            name="IV Fluid Bolus (500ml)",
            cost=150,
            description="Increases intravascular volume.",
            effects={"Blood Pressure Systolic": 10, "Urine Output": 5},
        ),
        Intervention(
            id="vasopressor",
            name="Start Vasopressor",
            cost=800,
            description="Increases systemic vascular resistance.",
            effects={"Blood Pressure Systolic": 20, "Heart Rate": -5},
        ),
        Intervention(
            id="antibiotics",
            name="Broad-Spectrum Antibiotics",
            cost=500,
            description="Treats underlying infection. Effects are not immediate.",
            effects={},
        ),
        Intervention(
            id="insulin-drip",
            name="Insulin Drip for Hyperkalemia",
            cost=300,
            description="Shifts potassium into cells.",
            effects={"Potassium (K+)": -0.5},
        ),
        Intervention(
            id="bicarb-amp",
            name="Sodium Bicarbonate Ampule",
            cost=200,
            description="Corrects metabolic acidosis.",
            effects={"Bicarbonate (HCO3)": 2},
        ),
        Intervention(
            id="dialysis",
            name="Urgent Hemodialysis",
            cost=2500,
            description="Removes waste products and excess fluid.",
            effects={
                "Creatinine": -1.0,
                "Potassium (K+)": -1.0,
                "Bicarbonate (HCO3)": 3,
                "Lactate": -1.0,
            },
        ),
    )

    return Scenario(
        id="aki-sepsis",
        title="Acute Kidney Injury secondary to Sepsis",
        description=(
            "A 68-year-old male is admitted from the ER with fever, "
            "hypotension, and decreased urine output."
        ),
        patient=PatientInfo(
            name="John Doe",
            age=68,
            sex="Male",
            history="History of type 2 diabetes and hypertension. No known prior kidney disease.",
        ),
        initial_budget=5000,
        time_limit=300,  # 5 minutes
        initial_clinical_params=clinical,
        initial_lab_params=labs,
        available_interventions=interventions,
    )
