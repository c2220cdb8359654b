"""Shared builders for integration tests."""

from dishka import AsyncContainer

from board.domain.model import Category, Post, User
from board.domain.service import CategoryService, PostService, UserService

DEFAULT_PASSWORD = "s3cret-pass"


async def register_user(
    env: AsyncContainer,
    email: str = "a@x.com",
    nickname: str = "nick-a",
    password: str = DEFAULT_PASSWORD,
) -> User:
    users = await env.get(UserService)
    return await users.register(email, password, nickname)


async def create_category(env: AsyncContainer, name: str = "General") -> Category:
    categories = await env.get(CategoryService)
    return await categories.create_category(name, "General discussion")


async def create_post(
    env: AsyncContainer,
    author: User,
    category: Category,
    title: str = "Hello",
    content: str = "First post",
) -> Post:
    posts = await env.get(PostService)
    return await posts.create_post(author.id, category.id, title, content)
