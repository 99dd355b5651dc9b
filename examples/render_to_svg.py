import jwwsvg


result = jwwsvg.load("examples/data/sample.json").render(
    style=jwwsvg.get_theme("solarizedLight"),
    on_invalid_layer="warn",
)
result.write("/tmp/sample.svg")
print(result.layer_counts())
