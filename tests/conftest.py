import pytest

from spendwise.infrastructure.storage.kv import InMemoryKeyValueStore

SAMPLE_OUTPUT = """🧾 Extracted Purchase Details
Vendor: ABC Stationery
Date: 12 Aug 2024
Items: A4 Paper pack - 5, Printer Ink - 2
Total Amount: ₹3,450
Tax: Not Available
Payment Method: UPI

🗂 Expense Category
Category: Office Supplies
Reason: Paper and printer ink are routine office consumables.

📊 Purchase Intelligence Insights
- Printer ink is the largest share of this bill.
- Paper is bought in small packs rather than cartons.
- Payment was made digitally, which simplifies record keeping.

🔧 Business Recommendations
- Buy in bulk to reduce the per-pack paper cost.
- Compare compatible ink cartridges from other suppliers.
- Ask the vendor for a GST invoice to claim input tax.

💬 Summary for Business Owner
This is a routine office supplies purchase. Ink dominates the cost, so negotiating ink prices will have the biggest impact.
"""

SPANISH_TRANSLATION = """--- TRANSLATION (Spanish) ---

🧾 Detalles de la compra
Proveedor: ABC Stationery
Fecha: 12 ago 2024
Artículos: Paquete de papel A4 - 5, Tinta de impresora - 2
Importe total: ₹3,450
Impuesto: No disponible
Método de pago: UPI

🗂 Categoría de gasto
Categoría: Material de oficina
Motivo: El papel y la tinta son consumibles habituales de oficina.

📊 Información de compra
- La tinta es la mayor parte de la factura.
- El papel se compra en paquetes pequeños.
- El pago fue digital.

🔧 Recomendaciones
- Compre al por mayor.
- Compare cartuchos compatibles.
- Solicite una factura con GST.

💬 Resumen para el propietario
Es una compra rutinaria de material de oficina.
"""

DUAL_OUTPUT = SAMPLE_OUTPUT + "\n" + SPANISH_TRANSLATION


class FakeLLM:
    """Records calls and replies with a canned response (or raises it)."""

    def __init__(self, response=SAMPLE_OUTPUT):
        self.response = response
        self.calls = []

    def generate(self, prompt, system_instruction=None, params=None):
        self.calls.append(
            {"prompt": prompt, "system_instruction": system_instruction, "params": params}
        )
        if isinstance(self.response, Exception):
            raise self.response
        return self.response

    @property
    def meta(self):
        return {
            "backend": "ollama",
            "model": "fake-model",
            "profile": "test",
        }


@pytest.fixture
def kv():
    return InMemoryKeyValueStore()


@pytest.fixture
def fake_llm():
    return FakeLLM()
