from html import escape

BASE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
	<head>
		<meta charset="UTF-8" />
		<meta name="viewport" content="width=device-width, initial-scale=1.0" />
		<title>{title}</title>
		<meta name="description" content="{description}" />
		<style>
			:root {{ color-scheme: dark; }}
			* {{ box-sizing: border-box; }}
			body {{
				max-width: 540px;
				margin: 0 auto;
				padding: 1rem;
				font-family: sans-serif;
				line-height: 1.5;
				background-color: #121212;
				color: #fff;
			}}
			form {{ display: grid; gap: 1rem; grid-template-columns: 2fr 1fr; }}
		</style>
	</head>
	<body>
		{content}
	</body>
</html>"""

DEFAULT_DESCRIPTION = "A small service to upload and share log files."

HOME_CONTENT = """<h1>{app_name}</h1>
		<p>{description}</p>
		<h2>Upload a new log</h2>
		<p>Once uploaded you'll get a link you can use to share the log file.</p>
		<form method="post" enctype="multipart/form-data">
			<input type="file" name="file" id="fileInput" accept=".txt, .log, .dmp" required>
			<button type="submit">Upload</button>
		</form>
		<h2>Download a log</h2>
		<p>You can download a specific log if you know its unique identifier.</p>
		<form>
			<input type="text" name="id" placeholder="ab92275a-745e-4c35-ad95-83e853803a43" required>
			<button type="submit">Download</button>
		</form>
		<script>
			document.querySelector('input#fileInput').addEventListener('change', (e) => {{
				if (e.target.files[0].size > {max_file_size}) {{
					alert('Your selected file is too large, it must be under {max_file_size_label}');
					e.target.value = '';
				}}
			}});
		</script>"""

UPLOADED_CONTENT = """<h1>Log successfully uploaded!</h1>
		<p>Your log has been uploaded and is now available at the following address:</p>
		<p><a href="{share_url}">{share_url}</a></p>
		<p>Anyone with this link can download your log file. It will be deleted in {retention}.</p>
		<p><a href="">Go back to home page</a></p>"""


def render_page(content: str, title: str, description: str = DEFAULT_DESCRIPTION) -> str:
    return BASE_TEMPLATE.format(content=content, title=escape(title), description=escape(description))


def format_size(size: int) -> str:
    if size >= 1024 * 1024:
        return f"{size / (1024 * 1024):g} MiB"
    if size >= 1024:
        return f"{size / 1024:g} KiB"
    return f"{size} bytes"


def format_retention(ttl_seconds: int) -> str:
    days, remainder = divmod(ttl_seconds, 86400)
    if days and not remainder:
        return f"{days} day" if days == 1 else f"{days} days"
    hours = max(1, round(ttl_seconds / 3600))
    return f"{hours} hour" if hours == 1 else f"{hours} hours"


def render_home(app_name: str, max_file_size: int) -> str:
    content = HOME_CONTENT.format(
        app_name=escape(app_name),
        description=escape(DEFAULT_DESCRIPTION),
        max_file_size=int(max_file_size),
        max_file_size_label=format_size(max_file_size),
    )
    return render_page(content, app_name)


def render_uploaded(share_url: str, ttl_seconds: int) -> str:
    content = UPLOADED_CONTENT.format(share_url=escape(share_url), retention=format_retention(ttl_seconds))
    return render_page(content, "Log successfully uploaded!")
