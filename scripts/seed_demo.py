"""
Seed demo data: temas, inscritos, chamada e lançamentos.
Run:  python -m scripts.seed_demo
"""
import sys
from datetime import date

# ── bootstrap ────────────────────────────────────────────────────
from profoli.infrastructure.db.session import get_session_factory
from profoli.infrastructure.db.models import Attendee, Theme
from profoli.infrastructure.storage.local import get_storage

from profoli.application.attendees import CreateAttendeeUseCase
from profoli.application.attendance import ReconcileAttendanceUseCase
from profoli.application.financial import RecordTransactionUseCase
from profoli.application.justifications import CreateJustificationUseCase
from profoli.application.themes import CreateThemeUseCase, FileUpload
from profoli.domain.attendance import RosterEntry
from profoli.utils.pdf import render_table_pdf

db = get_session_factory()()

if db.query(Attendee).count() > 0 or db.query(Theme).count() > 0:
    print("Database already has data, nothing to seed")
    db.close()
    sys.exit(0)

storage = get_storage()

# ═══════════════════════════════════════════════════════════════
# Temas (apostila gerada na hora)
# ═══════════════════════════════════════════════════════════════
themes = {}
for title, speaker, event_date in [
    ("Liderança Cristã", "Pr. João Almeida", date(2026, 3, 7)),
    ("Música na Liturgia", "Maestro Paulo Lima", date(2026, 4, 4)),
    ("Escola Bíblica Dominical", "Profª. Ana Costa", date(2026, 5, 2)),
]:
    handout = render_table_pdf(title, ["Tópico", "Referência"], [["Introdução", speaker]])
    themes[title] = CreateThemeUseCase(db, storage).execute(
        title=title,
        speaker=speaker,
        event_date=event_date,
        file=FileUpload(filename="apostila.pdf", content_type="application/pdf", content=handout),
    )
print(f"Themes: {len(themes)}")

# ═══════════════════════════════════════════════════════════════
# Inscritos
# ═══════════════════════════════════════════════════════════════
create_attendee = CreateAttendeeUseCase(db)
attendees = {}
for name, cpf, roles, church, phone in [
    ("Ana Souza", "111.444.777-35", ["Regente", "Ministério de Louvor"], "Sede", "(11) 98888-0001"),
    ("Bruno Ferreira", "529.982.247-25", ["Pastor"], "Congregação Vila Nova", "(11) 98888-0002"),
    ("Carla Mendes", "390.533.447-05", ["Professor(a) EBD"], "Sede", None),
    ("Daniel Rocha", "862.170.330-60", ["Diáconos", "Porteiro"], "Congregação Jardim", "(11) 98888-0004"),
    ("Elisa Martins", "123.456.789-09", ["Membro"], "Sede", None),
]:
    attendees[name] = create_attendee.execute(name=name, cpf=cpf, roles=roles, church=church, phone=phone)
print(f"Attendees: {len(attendees)}")

# ═══════════════════════════════════════════════════════════════
# Financeiro
# ═══════════════════════════════════════════════════════════════
record = RecordTransactionUseCase(db)
record.execute(type="income", category="Inscrição", amount="50.00", date=date(2026, 3, 1),
               description="Inscrição", attendee_id=attendees["Ana Souza"])
record.execute(type="income", category="Inscrição", amount="50.00", date=date(2026, 3, 2),
               description="Inscrição", attendee_id=attendees["Bruno Ferreira"])
record.execute(type="income", category="Inscrição", amount="0", date=date(2026, 3, 2),
               description="Palestrante convidado", attendee_id=attendees["Daniel Rocha"], is_exempt=True)
record.execute(type="income", category="Oferta", amount="135,40", date=date(2026, 3, 7))
record.execute(type="expense", category="Ajuda de custo para o Palestrante", amount="200",
               date=date(2026, 3, 7), description="Pr. João Almeida")
record.execute(type="expense", category="Material de secretaria", amount="48.90", date=date(2026, 3, 5))
print("Transactions: 6")

# ═══════════════════════════════════════════════════════════════
# Chamada finalizada do primeiro tema + justificativa
# ═══════════════════════════════════════════════════════════════
first_theme = themes["Liderança Cristã"]
ReconcileAttendanceUseCase(db).execute(
    session_date=date(2026, 3, 7),
    theme_id=first_theme,
    records=[
        RosterEntry(attendee_id=attendee_id, present=name != "Carla Mendes")
        for name, attendee_id in attendees.items()
    ],
    finalize=True,
)
CreateJustificationUseCase(db).execute(
    attendee_id=attendees["Carla Mendes"],
    theme_id=first_theme,
    absence_date=date(2026, 3, 7),
    reason="Trabalho",
)
print("Attendance: 1 finalized session")

db.close()
print("Done.")
