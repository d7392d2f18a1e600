"""
Next.js stack plugin — App Router project with TypeScript, ESLint and Jest.
"""

from __future__ import annotations

from lattice.core.context import GenerationContext
from lattice.core.models.config import ProjectConfig
from lattice.plugins.base import Plugin, ValidationResult
from lattice.plugins.stack.common import check_scripts, eslint_config, json_bytes, text_bytes

_PACKAGE_JSON = {
    "name": "my-app",
    "version": "0.1.0",
    "private": True,
    "scripts": {
        "dev": "next dev",
        "build": "next build",
        "start": "next start",
        "lint": "eslint .",
        "typecheck": "tsc --noEmit",
        "test": "jest",
    },
    "dependencies": {
        "react": "^19.2.1",
        "react-dom": "^19.2.1",
        "next": "^16.1.0",
    },
    "devDependencies": {
        "typescript": "^5.9.0",
        "@types/node": "^20.11.0",
        "@types/react": "^19.0.0",
        "@types/react-dom": "^19.0.0",
        "eslint": "^9.0.0",
        "@typescript-eslint/parser": "^8.0.0",
        "@typescript-eslint/eslint-plugin": "^8.0.0",
        "jest": "^29.7.0",
        "@types/jest": "^29.5.11",
        "ts-jest": "^29.1.1",
        "@testing-library/react": "^16.0.0",
        "@testing-library/jest-dom": "^6.1.5",
        "jest-environment-jsdom": "^29.7.0",
    },
}

_TSCONFIG_JSON = {
    "compilerOptions": {
        "target": "ES2022",
        "lib": ["dom", "dom.iterable", "esnext"],
        "allowJs": True,
        "skipLibCheck": True,
        "strict": True,
        "noEmit": True,
        "esModuleInterop": True,
        "module": "esnext",
        "moduleResolution": "bundler",
        "resolveJsonModule": True,
        "isolatedModules": True,
        "jsx": "preserve",
        "incremental": True,
        "plugins": [{"name": "next"}],
        "paths": {"@/*": ["./*"]},
    },
    "include": ["next-env.d.ts", "**/*.ts", "**/*.tsx", ".next/types/**/*.ts"],
    "exclude": ["node_modules"],
}

_NEXT_CONFIG = """\
/** @type {import('next').NextConfig} */
const nextConfig = {
  reactStrictMode: true,
};

module.exports = nextConfig;
"""

_APP_LAYOUT = """\
export default function RootLayout({
  children,
}: {
  children: React.ReactNode;
}) {
  return (
    <html lang="en">
      <body>{children}</body>
    </html>
  );
}
"""

_APP_PAGE = """\
export default function Home() {
  return (
    <main>
      <h1>Welcome to Next.js</h1>
    </main>
  );
}
"""

_JEST_CONFIG = """\
const nextJest = require('next/jest');

const createJestConfig = nextJest({
  dir: './',
});

const customJestConfig = {
  setupFilesAfterEnv: ['<rootDir>/jest.setup.js'],
  testEnvironment: 'jest-environment-jsdom',
  moduleNameMapper: {
    '^@/(.*)$': '<rootDir>/$1',
  },
};

module.exports = createJestConfig(customJestConfig);
"""

_JEST_SETUP = """\
import '@testing-library/jest-dom';
"""

_APP_PAGE_TEST = """\
import { render, screen } from '@testing-library/react';
import '@testing-library/jest-dom';
import Home from './page';

describe('Home', () => {
  it('renders welcome message', () => {
    render(<Home />);
    expect(screen.getByText('Welcome to Next.js')).toBeInTheDocument();
  });
});
"""

# Policy check → npm script that runs it
_CHECK_SCRIPTS = {
    "lint": "lint",
    "typecheck": "typecheck",
    "test": "test",
    "build": "build",
}


class NextJsPlugin(Plugin):
    """Base files for a Next.js project."""

    id = "stack/nextjs"
    version = "0.1.0"
    phase = "render"
    conflict_policy = "error"

    def applies_to(self, config: ProjectConfig) -> bool:
        return config.project_type == "nextjs"

    def apply(self, context: GenerationContext) -> None:
        if context.has_file("package.json"):
            raise FileExistsError("package.json already exists")

        context.add_file("package.json", json_bytes(_PACKAGE_JSON))
        context.add_file("tsconfig.json", json_bytes(_TSCONFIG_JSON))
        context.add_file("next.config.js", text_bytes(_NEXT_CONFIG))
        context.add_file(
            "eslint.config.mjs",
            text_bytes(eslint_config([".next/**", "node_modules/**", "out/**", "dist/**"])),
        )
        context.add_file("app/layout.tsx", text_bytes(_APP_LAYOUT))
        context.add_file("app/page.tsx", text_bytes(_APP_PAGE))
        context.add_file("jest.config.js", text_bytes(_JEST_CONFIG))
        context.add_file("jest.setup.js", text_bytes(_JEST_SETUP))
        context.add_file("app/page.test.tsx", text_bytes(_APP_PAGE_TEST))

    def validate(self, context: GenerationContext) -> ValidationResult:
        return check_scripts(context, _CHECK_SCRIPTS)
