DISALLOWED_PATHS = ["/admin/", "/api/", "/client/", "/proposal/"]


def render_robots(site_url: str) -> str:
    """Allow everything except the admin, API, client portal and proposal paths."""
    lines = ["User-Agent: *", "Allow: /"]
    lines.extend(f"Disallow: {path}" for path in DISALLOWED_PATHS)
    lines.append("")
    lines.append(f"Sitemap: {site_url.rstrip('/')}/sitemap.xml")
    return "\n".join(lines) + "\n"
