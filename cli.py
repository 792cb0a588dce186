"""CLI commands for club events administration."""

import asyncio
from uuid import UUID

import typer
from sqlalchemy import select

from src.auth.tokens import create_access_token
from src.config.database import async_session_manager
from src.events.repository.consistency import find_attendees_without_registration
from src.events.repository.orm_models import Registration
from src.models import Club, ClubMember, University, User, UserRole

app = typer.Typer(help="CLI commands for club events administration")


@app.command()
def create_university(
    name: str = typer.Argument(..., help="University name"),
    code: str = typer.Option(None, "--code", "-c", help="Short code, e.g. MIT"),
    location: str = typer.Option(None, "--location", "-l", help="City or campus"),
):
    """Create a university (the organization clubs and events belong to)."""
    async def _create_university():
        async with async_session_manager() as session:
            university = University(name=name, code=code, location=location)
            session.add(university)
            await session.flush()
            return university.uuid

    university_id = asyncio.run(_create_university())

    typer.secho("University created!", fg=typer.colors.GREEN)
    typer.secho(f"  Name: {name}", fg=typer.colors.BLUE)
    typer.secho(f"  University ID: {university_id}", fg=typer.colors.CYAN)


@app.command()
def create_user(
    name: str = typer.Argument(..., help="Full name"),
    email: str = typer.Argument(..., help="Email address"),
    university_id: str = typer.Option(
        None,
        "--university",
        "-u",
        help="University UUID the user belongs to",
    ),
    role: UserRole = typer.Option(
        UserRole.STUDENT,
        "--role",
        "-r",
        help="Student, Club Admin or Administrator",
    ),
):
    """Create a user and print a bearer token for them."""
    async def _create_user():
        async with async_session_manager() as session:
            stmt = select(User).where(User.email == email)
            result = await session.execute(stmt)
            if result.scalar_one_or_none():
                raise ValueError(f"User already exists: {email}")

            user = User(
                name=name,
                email=email,
                role=role,
                is_active=True,
                university_id=UUID(university_id) if university_id else None,
            )
            session.add(user)
            await session.flush()
            return user.uuid

    try:
        user_id = asyncio.run(_create_user())
    except ValueError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.secho("User created!", fg=typer.colors.GREEN)
    typer.secho(f"  Name: {name} ({role.value})", fg=typer.colors.BLUE)
    typer.secho(f"  User ID: {user_id}", fg=typer.colors.CYAN)
    typer.secho(f"  Token: {create_access_token(user_id)}", fg=typer.colors.CYAN)


@app.command()
def issue_token(
    user_id: str = typer.Argument(..., help="User UUID"),
):
    """Print a fresh bearer token for an existing user."""
    async def _get_user():
        async with async_session_manager() as session:
            stmt = select(User).where(User.uuid == UUID(user_id))
            result = await session.execute(stmt)
            return result.scalar_one_or_none()

    user = asyncio.run(_get_user())
    if not user:
        typer.secho(f"User not found: {user_id}", fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.echo(create_access_token(user.uuid))


@app.command()
def create_club(
    name: str = typer.Argument(..., help="Club name"),
    university_id: str = typer.Argument(..., help="University UUID"),
    president_id: str = typer.Option(
        None,
        "--president",
        "-p",
        help="User UUID of the club president",
    ),
    category: str = typer.Option(None, "--category", "-c", help="Club category"),
):
    """Create a club. The president, if given, is also added as a member."""
    async def _create_club():
        async with async_session_manager() as session:
            university = await session.get(University, UUID(university_id))
            if not university:
                raise ValueError(f"University not found: {university_id}")

            club = Club(
                name=name,
                category=category,
                university_id=university.uuid,
                president_id=UUID(president_id) if president_id else None,
            )
            if president_id:
                club.members.append(ClubMember(user_id=UUID(president_id), role="President"))
            session.add(club)
            await session.flush()
            return club.uuid

    try:
        club_id = asyncio.run(_create_club())
    except ValueError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.secho("Club created!", fg=typer.colors.GREEN)
    typer.secho(f"  Name: {name}", fg=typer.colors.BLUE)
    typer.secho(f"  Club ID: {club_id}", fg=typer.colors.CYAN)


@app.command()
def add_member(
    club_id: str = typer.Argument(..., help="Club UUID"),
    user_id: str = typer.Argument(..., help="User UUID to add to the club"),
    role: str = typer.Option("Member", "--role", "-r", help="Role inside the club"),
):
    """Add a user to a club's member list."""
    async def _add_member():
        async with async_session_manager() as session:
            club = await session.get(Club, UUID(club_id))
            if not club:
                raise ValueError(f"Club not found: {club_id}")
            user = await session.get(User, UUID(user_id))
            if not user:
                raise ValueError(f"User not found: {user_id}")
            if any(member.user_id == user.uuid for member in club.members):
                raise ValueError(f"{user.name} is already a member of {club.name}")

            club.members.append(ClubMember(user_id=user.uuid, role=role))
            return club.name, user.name

    try:
        club_name, user_name = asyncio.run(_add_member())
    except ValueError as e:
        typer.secho(str(e), fg=typer.colors.RED)
        raise typer.Exit(1)

    typer.secho(f"{user_name} added to {club_name} as {role}", fg=typer.colors.GREEN)


@app.command()
def list_registrations(
    event_id: str = typer.Option(None, "--event", "-e", help="Only this event's registrations"),
):
    """Print the registration log, oldest first."""
    async def _list_registrations():
        async with async_session_manager() as session:
            stmt = select(Registration).order_by(Registration.registered_at)
            if event_id:
                stmt = stmt.where(Registration.event_id == UUID(event_id))
            result = await session.execute(stmt)
            return result.scalars().all()

    registrations = asyncio.run(_list_registrations())
    if not registrations:
        typer.secho("No registrations", fg=typer.colors.YELLOW)
        return

    for registration in registrations:
        typer.secho(
            f"  {registration.registered_at:%Y-%m-%d %H:%M}  {registration.student_name}"
            f" ({registration.university_name}) -> {registration.event_title}",
            fg=typer.colors.BLUE,
        )
    typer.secho(f"{len(registrations)} registration(s)", fg=typer.colors.GREEN)


@app.command()
def check_consistency():
    """Report attendees that have no entry in the registration log."""
    async def _check():
        async with async_session_manager(auto_commit=False) as session:
            return await find_attendees_without_registration(session)

    unlogged = asyncio.run(_check())
    if not unlogged:
        typer.secho("Every attendee has a registration entry", fg=typer.colors.GREEN)
        return

    typer.secho(f"{len(unlogged)} attendee(s) without a registration:", fg=typer.colors.RED)
    for entry in unlogged:
        typer.secho(
            f"  - {entry.event_title} ({entry.event_id}): user {entry.user_id}",
            fg=typer.colors.YELLOW,
        )
    raise typer.Exit(1)


if __name__ == "__main__":
    app()
