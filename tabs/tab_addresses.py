"""Tab 2: Addresses: rooms, spaces, tenant registration and placement, notices."""

from datetime import date

import streamlit as st
import pandas as pd

from data.session_store import (
    get_repository, get_selected_address_id, set_selected_address_id, commit,
    set_flash_message, pop_flash_message,
)
from data.validator import validate_address_form, validate_room_form, validate_tenant_form
from engine.assignment import tenant_sections, suggest_tenants_for_room
from engine.capacity import capacity_summary
from engine.conflicts import days_remaining
from engine.errors import HousingError
from engine.stats import compute_address_stats
from config.defaults import (
    ROOM_TYPES, ROOM_TYPE_LABELS, GENDERS, OPERATORS, OPERATOR_NAMES,
    EVICTION_REASONS, EVICTION_REASON_LABELS, DEFAULT_EVICTION_PERIOD_DAYS,
)


def _run(action, success_message, on_success=None):
    """Run a repository mutation; persist and rerun on success, show the core error otherwise.

    `success_message` may be a callable taking the action's result.
    """
    try:
        result = action()
    except (HousingError, ValueError) as e:
        st.error(str(e))
        return
    commit()
    if on_success is not None:
        on_success(result)
    set_flash_message(success_message(result) if callable(success_message) else success_message)
    st.rerun()


def _show_errors(result) -> bool:
    for e in result.errors:
        st.error(e)
    for w in result.warnings:
        st.warning(w)
    return result.is_valid


def _evicted_message(evicted) -> str:
    if not evicted:
        return "Adres ponownie aktywny"
    return "Adres ponownie aktywny. Zwolnieni: " + ", ".join(t.full_name for t in evicted)


def _render_add_address(project):
    with st.expander("Dodaj adres"):
        with st.form("add_address"):
            name = st.text_input("Nazwa")
            full_address = st.text_input("Pełny adres")
            col1, col2, col3 = st.columns(3)
            total_spaces = col1.number_input("Liczba miejsc", min_value=0, step=1, value=10)
            eviction_period = col2.number_input("Okres wypowiedzenia (dni)", min_value=1, step=1,
                                                value=DEFAULT_EVICTION_PERIOD_DAYS)
            price = col3.number_input("Cena za miejsce", min_value=0.0, step=50.0)
            total_cost = col1.number_input("Koszt całkowity", min_value=0.0, step=100.0)
            operator = col2.selectbox("Operator", options=OPERATORS,
                                      format_func=lambda o: OPERATOR_NAMES.get(o, "Inny"))
            operator_name = col3.text_input("Nazwa operatora (dla 'Inny')")
            submitted = st.form_submit_button("Zapisz", type="primary")

        if submitted:
            data = {
                "name": name, "full_address": full_address, "total_spaces": total_spaces,
                "eviction_period": eviction_period, "price_per_space": price,
                "total_cost": total_cost, "operator": operator, "operator_name": operator_name,
            }
            if _show_errors(validate_address_form(data)):
                repo = get_repository()
                _run(
                    lambda: repo.add_address(
                        project.id, name, full_address, int(total_spaces),
                        eviction_period=int(eviction_period), price_per_space=price,
                        total_cost=total_cost, operator=operator, operator_name=operator_name.strip(),
                    ),
                    f"Dodano adres {name}",
                    on_success=lambda address: set_selected_address_id(address.id),
                )


def _render_address_header(address):
    repo = get_repository()
    stats = compute_address_stats(address)
    summary = capacity_summary(address)
    col1, col2, col3, col4 = st.columns(4)
    col1.metric("Miejsca w pokojach", f"{summary['allocated']}/{summary['total']}")
    col2.metric("Zajęte", stats.occupied)
    col3.metric("Wypowiedzenie", stats.notice)
    col4.metric("Mieszkańcy", stats.people_count)
    st.caption(f"{address.full_address} · Operator: {address.operator_display_name}")

    col_a, col_b = st.columns(2)
    with col_a:
        if address.status == "notice":
            since = f" od {address.notice_start:%Y-%m-%d}" if address.notice_start else ""
            st.warning(f"Adres w wypowiedzeniu{since}")
            if st.button("Cofnij wypowiedzenie adresu", key=f"addr_notice_off_{address.id}"):
                _run(lambda: repo.remove_address_from_notice(address.id), _evicted_message)
        elif st.button("Wypowiedzenie całego adresu", key=f"addr_notice_on_{address.id}"):
            _run(lambda: repo.put_address_on_notice(address.id), "Adres w wypowiedzeniu")
    with col_b:
        confirm = st.checkbox("Potwierdzam usunięcie adresu", key=f"addr_del_confirm_{address.id}")
        if address.unassigned_tenants:
            st.caption(f"Uwaga: {len(address.unassigned_tenants)} mieszkańca/ów bez miejsca zostanie usuniętych.")
        if st.button("Usuń adres", disabled=not confirm, key=f"addr_del_{address.id}"):
            _run(
                lambda: repo.delete_address(address.id),
                f"Usunięto adres {address.name}",
                on_success=lambda _: set_selected_address_id(None),
            )


def _render_room(address, room):
    repo = get_repository()
    label = f"{room.name} · {ROOM_TYPE_LABELS.get(room.room_type, room.room_type)} · {room.tenant_count}/{len(room.spaces)}"
    with st.expander(label):
        rows = []
        for space in sorted(room.spaces, key=lambda s: s.number):
            remaining = days_remaining(space.notice.end_date) if space.notice else None
            rows.append({
                "Miejsce": space.number,
                "Status": space.status,
                "Mieszkaniec": space.tenant.full_name if space.tenant else "",
                "Koniec wypowiedzenia": space.notice.end_date.isoformat() if space.notice else "",
                "Pozostało dni": remaining if remaining is not None else "",
            })
        if rows:
            st.dataframe(pd.DataFrame(rows), use_container_width=True)

        space_ids = [s.id for s in sorted(room.spaces, key=lambda s: s.number)]
        numbers = {s.id: s.number for s in room.spaces}
        if space_ids:
            col1, col2, col3 = st.columns(3)
            chosen = col1.selectbox("Miejsce", options=space_ids, format_func=lambda s: str(numbers[s]),
                                    key=f"space_pick_{room.id}")
            if col2.button("Wypowiedzenie", key=f"space_notice_{room.id}"):
                _run(lambda: repo.put_on_notice(chosen), "Miejsce w wypowiedzeniu")
            if col2.button("Cofnij wypowiedzenie", key=f"space_unnotice_{room.id}"):
                _run(lambda: repo.remove_from_notice(chosen), "Wypowiedzenie cofnięte")
            if col3.button("Usuń miejsce", key=f"space_del_{room.id}"):
                _run(lambda: repo.delete_space(chosen), "Miejsce usunięte")

        candidates = suggest_tenants_for_room(address, room)
        if candidates:
            tenant_id = st.selectbox(
                "Zakwateruj mieszkańca",
                options=[t.id for t in candidates],
                format_func=lambda tid: next(t.full_name for t in candidates if t.id == tid),
                key=f"room_tenant_{room.id}",
            )
            if st.button("Przydziel", key=f"room_assign_{room.id}"):
                try:
                    space = repo.select_tenant_for_room(room.id, tenant_id)
                except HousingError as e:
                    st.error(str(e))
                else:
                    if space is None:
                        st.warning("Brak wolnego miejsca w tym pokoju")
                    else:
                        commit()
                        set_flash_message("Zapisano przydział")
                        st.rerun()

        with st.form(f"edit_room_{room.id}"):
            col1, col2, col3 = st.columns(3)
            name = col1.text_input("Nazwa pokoju", value=room.name, key=f"room_name_{room.id}")
            room_type = col2.selectbox("Typ", options=ROOM_TYPES, index=ROOM_TYPES.index(room.room_type),
                                       format_func=lambda t: ROOM_TYPE_LABELS[t])
            total = col3.number_input("Liczba miejsc", min_value=0, step=1, value=room.total_spaces,
                                      key=f"room_total_{room.id}")
            if st.form_submit_button("Zapisz pokój"):
                # resize only when the count was actually changed
                new_total = int(total) if int(total) != room.total_spaces else None
                form = {"name": name, "room_type": room_type, "total_spaces": int(total)}
                if _show_errors(validate_room_form(form, min_spaces=0)):
                    _run(lambda: repo.update_room(room.id, name, room_type, new_total),
                         f"Pokój \"{name}\" zaktualizowany pomyślnie")

        if st.button("Usuń pokój", key=f"room_del_{room.id}"):
            _run(lambda: repo.delete_room(room.id), f"Usunięto pokój {room.name}")


def _render_add_room(address):
    repo = get_repository()
    with st.expander("Dodaj pokój"):
        with st.form(f"add_room_{address.id}"):
            col1, col2, col3 = st.columns(3)
            name = col1.text_input("Nazwa pokoju")
            room_type = col2.selectbox("Typ", options=ROOM_TYPES, format_func=lambda t: ROOM_TYPE_LABELS[t])
            total = col3.number_input("Liczba miejsc", min_value=1, step=1, value=2)
            if st.form_submit_button("Dodaj", type="primary"):
                if _show_errors(validate_room_form({"name": name, "room_type": room_type, "total_spaces": total})):
                    _run(lambda: repo.add_room(address.id, name, room_type, int(total)), f"Dodano pokój {name}")
        col1, col2 = st.columns(2)
        count = col1.number_input("Wygeneruj puste pokoje", min_value=1, step=1, value=1,
                                  key=f"gen_count_{address.id}")
        if col2.button("Generuj", key=f"gen_rooms_{address.id}"):
            _run(lambda: repo.generate_rooms(address.id, int(count)), f"Dodano {int(count)} pokoi")


def _render_tenants(address):
    repo = get_repository()
    st.subheader("Mieszkańcy")

    with st.expander("Dodaj mieszkańca"):
        with st.form(f"add_tenant_{address.id}"):
            col1, col2 = st.columns(2)
            first_name = col1.text_input("Imię")
            last_name = col2.text_input("Nazwisko")
            gender = col1.selectbox("Płeć", options=GENDERS)
            birth_year = col2.number_input("Rok urodzenia", min_value=date.today().year - 100,
                                           max_value=date.today().year, value=1990, step=1)
            check_in = col1.date_input("Data zameldowania", value=date.today())
            work_start = col2.date_input("Początek pracy", value=None)
            price = col1.number_input("Cena miesięczna", min_value=0.0, step=50.0,
                                      value=float(address.price_per_space or 0))
            if st.form_submit_button("Zarejestruj", type="primary"):
                data = {
                    "first_name": first_name, "last_name": last_name, "gender": gender,
                    "birth_year": birth_year, "check_in_date": check_in,
                    "work_start_date": work_start, "monthly_price": price,
                }
                if _show_errors(validate_tenant_form(data)):
                    _run(lambda: repo.add_tenant(
                        address.id, first_name=first_name, last_name=last_name, gender=gender,
                        birth_year=int(birth_year), check_in_date=check_in,
                        monthly_price=price, work_start_date=work_start,
                    ), f"Zarejestrowano {first_name} {last_name}")

    for section in tenant_sections(address):
        st.markdown(f"**{section['title']}** ({len(section['data'])})")
        for item in section["data"]:
            tenant = item["tenant"]
            col1, col2, col3 = st.columns([3, 2, 2])
            col1.write(f"{tenant.full_name} · {item['room_name'] or 'Bez miejsca'}")
            reason = col2.selectbox("Powód", options=EVICTION_REASONS, key=f"reason_{tenant.id}",
                                    format_func=lambda r: EVICTION_REASON_LABELS[r],
                                    label_visibility="collapsed")
            if col3.button("Wymelduj", key=f"checkout_{tenant.id}"):
                _run(lambda: repo.check_out_tenant(tenant.id, date.today(), reason),
                     f"Wymeldowano {tenant.full_name}")
            if item["room_name"] is None and col3.button("Usuń", key=f"tenant_del_{tenant.id}"):
                _run(lambda: repo.delete_tenant(tenant.id), f"Usunięto {tenant.full_name}")


def render(sidebar_state):
    """Render the Addresses tab."""
    st.header("Adresy")

    message = pop_flash_message()
    if message:
        st.success(message)

    if sidebar_state.project_id is None:
        st.info("Wybierz lub dodaj projekt.")
        return

    repo = get_repository()
    project = repo.get_project(sidebar_state.project_id)
    _render_add_address(project)

    if not project.addresses:
        st.info("Projekt nie ma jeszcze adresów.")
        return

    address_ids = [a.id for a in project.addresses]
    names = {a.id: a.name for a in project.addresses}
    current = get_selected_address_id()
    address_id = st.selectbox(
        "Adres",
        options=address_ids,
        index=address_ids.index(current) if current in address_ids else 0,
        format_func=lambda a: names[a],
        key="address_pick",
    )
    set_selected_address_id(address_id)
    address = repo.get_address(address_id)

    _render_address_header(address)
    st.divider()
    st.subheader("Pokoje")
    for room in address.rooms:
        _render_room(address, room)
    _render_add_room(address)
    st.divider()
    _render_tenants(address)
