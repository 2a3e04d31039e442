"""
msgbody - media-type keyed message body readers and writers

This setup.py file is provided for pip install compatibility.
"""

from setuptools import find_packages, setup

if __name__ == "__main__":
    setup(
        name="msgbody",
        version="0.1.0",
        description="Media-type keyed registry of message body readers and writers with negotiation.",
        package_dir={"": "src"},
        packages=find_packages("src"),
        python_requires=">=3.11",
        install_requires=[
            "pydantic>=2.0",
            "PyYAML>=6.0",
        ],
        extras_require={
            "test": [
                "pytest>=7.0",
            ],
        },
        entry_points={
            "msgbody.readers": [
                "text = msgbody.providers.builtin:TextProvider",
                "json = msgbody.providers.builtin:JsonProvider",
                "pydantic = msgbody.providers.builtin:PydanticModelProvider",
                "yaml = msgbody.providers.builtin:YamlProvider",
                "bytes = msgbody.providers.builtin:BytesProvider",
            ],
            "msgbody.writers": [
                "text = msgbody.providers.builtin:TextProvider",
                "json = msgbody.providers.builtin:JsonProvider",
                "pydantic = msgbody.providers.builtin:PydanticModelProvider",
                "yaml = msgbody.providers.builtin:YamlProvider",
                "bytes = msgbody.providers.builtin:BytesProvider",
            ],
        },
        classifiers=[
            "Development Status :: 4 - Beta",
            "Intended Audience :: Developers",
            "License :: OSI Approved :: Apache Software License",
            "Programming Language :: Python :: 3",
            "Programming Language :: Python :: 3.11",
            "Programming Language :: Python :: 3.12",
            "Topic :: Internet :: WWW/HTTP",
        ],
    )
