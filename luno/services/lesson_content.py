"""Built-in HTML/CSS lessons seeded on first start."""

LESSONS = [
    {
        "order_index": 1,
        "title": "HTML Basics",
        "description": "Meet the skeleton of every web page: doctype, html, head and body.",
        "difficulty_level": "beginner",
        "code": """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>My First Page</title>
</head>
<body>
    <!-- Everything visible goes inside body -->
    <h1>Hello, World!</h1>
    <p>This is my first web page.</p>
</body>
</html>""",
    },
    {
        "order_index": 2,
        "title": "HTML Elements",
        "description": "Headings, paragraphs, links, images and containers, with their attributes.",
        "difficulty_level": "beginner",
        "code": """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>HTML Elements</title>
</head>
<body>
    <h1 id="main-title" class="heading">Welcome</h1>
    <p class="intro">This is a paragraph with <strong>bold</strong> and <em>italic</em> text.</p>
    <a href="https://example.com" target="_blank">Visit Example</a>
    <img src="image.jpg" alt="Description" width="300" height="200">
    <div class="container">
        <span>Inline element</span>
    </div>
</body>
</html>""",
    },
    {
        "order_index": 3,
        "title": "CSS Introduction",
        "description": "Style a page with a <style> block: fonts, colors, spacing.",
        "difficulty_level": "beginner",
        "code": """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>CSS Introduction</title>
    <style>
        body {
            font-family: Arial, sans-serif;
            background-color: #f0f0f0;
            margin: 0;
            padding: 20px;
        }
        h1 {
            color: #333;
            font-size: 32px;
            text-align: center;
        }
        p {
            color: #666;
            line-height: 1.6;
        }
    </style>
</head>
<body>
    <h1>Styled Heading</h1>
    <p>This paragraph has custom styling applied.</p>
</body>
</html>""",
    },
    {
        "order_index": 4,
        "title": "CSS Selectors",
        "description": "Target elements by tag, class, id, nesting and state.",
        "difficulty_level": "intermediate",
        "code": """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>CSS Selectors</title>
    <style>
        /* Element selector */
        p {
            color: blue;
        }
        /* Class selector */
        .highlight {
            background-color: yellow;
        }
        /* ID selector */
        #header {
            font-size: 24px;
        }
        /* Descendant selector */
        div p {
            margin: 10px;
        }
        /* Pseudo-class selector */
        a:hover {
            color: red;
        }
    </style>
</head>
<body>
    <div id="header">Header</div>
    <p class="highlight">Highlighted text</p>
    <div>
        <p>Nested paragraph</p>
    </div>
    <a href="#">Hover me</a>
</body>
</html>""",
    },
    {
        "order_index": 5,
        "title": "Flexbox Layout",
        "description": "Lay out items in a row and share space with display: flex.",
        "difficulty_level": "intermediate",
        "code": """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>Flexbox Layout</title>
    <style>
        .container {
            display: flex;
            justify-content: space-between;
            align-items: center;
            height: 300px;
            background-color: #e0e0e0;
        }
        .item {
            flex: 1;
            padding: 20px;
            margin: 10px;
            background-color: #4CAF50;
            color: white;
            text-align: center;
        }
        .item:nth-child(2) {
            flex: 2;
        }
    </style>
</head>
<body>
    <div class="container">
        <div class="item">Item 1</div>
        <div class="item">Item 2 (larger)</div>
        <div class="item">Item 3</div>
    </div>
</body>
</html>""",
    },
]
