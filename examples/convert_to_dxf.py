import jwwsvg


result = jwwsvg.to_dxf(
    "examples/data/sample.json",
    "/tmp/sample_out.dxf",
    dxf_version="R2010",
)
print(result)
